"""Remote validation client — model-backed validation over the network.

Two transports, chosen once from configuration:
    - direct:    credential present, call the chat model from this process
    - delegated: no credential, POST the request to the backend endpoint

Transport problems raise RemoteValidationError. A geometric verdict, valid
or not, is always a normal ValidationResult return value.
"""

from typing import Any, Literal, Mapping, Optional, Union

import httpx
import structlog
from pydantic import ValidationError as PydanticValidationError

from app.agents.base import EmptyResponseError
from app.agents.geometry_expert import GeometryExpertAgent, to_numeric_payload
from app.config import Settings, get_settings
from app.services.strategy import ValidationStrategy
from app.validators.models import ShapeKind, UNKNOWN_SHAPE_MESSAGE, ValidationResult
from app.validators.registry import SHAPE_CONFIGS, resolve_shape

logger = structlog.get_logger()

SERVER_ERROR_MESSAGE = "Gagal memvalidasi lewat server. Pastikan Anda terhubung ke internet."
EMPTY_RESPONSE_MESSAGE = "Layanan AI mengembalikan respons kosong."
AI_SERVICE_ERROR_MESSAGE = "Gagal berkomunikasi dengan layanan AI. Periksa API Key Anda."

TransportMode = Literal["direct", "delegated"]


class RemoteValidationError(Exception):
    """A transport or protocol fault, never a geometric verdict.

    Attributes:
        message: User-facing explanation
        detail: Underlying cause (e.g. the server's verbatim error body)
    """

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class RemoteValidationClient(ValidationStrategy):
    """Validates measurements through the model, directly or via the backend."""

    name = "remote"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        agent: Optional[GeometryExpertAgent] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings or get_settings()
        self.mode: TransportMode = "direct" if self.settings.has_model_credential else "delegated"
        self._agent = agent
        self._http_client = http_client

    @property
    def agent(self) -> GeometryExpertAgent:
        if self._agent is None:
            self._agent = GeometryExpertAgent(api_key=self.settings.OPENAI_API_KEY)
        return self._agent

    async def validate(self, shape: Union[ShapeKind, str], inputs: Mapping[str, Any]) -> ValidationResult:
        kind = resolve_shape(shape)
        if kind is None:
            # No label to prompt with; answer the same way the local validator does
            return ValidationResult.invalid(UNKNOWN_SHAPE_MESSAGE)

        shape_label = SHAPE_CONFIGS[kind].label
        numeric_inputs = to_numeric_payload(inputs)

        if self.mode == "delegated":
            return await self._validate_delegated(kind, shape_label, numeric_inputs)
        return await self._validate_direct(kind, shape_label, numeric_inputs)

    async def _validate_delegated(
        self,
        kind: ShapeKind,
        shape_label: str,
        numeric_inputs: dict[str, Optional[float]],
    ) -> ValidationResult:
        """POST to the backend endpoint; any failure becomes a server fault."""
        body = {"shape": kind.value, "inputs": numeric_inputs, "shapeLabel": shape_label}
        url = self.settings.VALIDATE_ENDPOINT_URL

        try:
            response = await self._post(url, body)
        except httpx.HTTPError as e:
            logger.error("remote_validation_failed", mode="delegated", url=url, error=str(e))
            raise RemoteValidationError(SERVER_ERROR_MESSAGE, detail=str(e)) from e

        if not response.is_success:
            detail = f"Server Error: {response.text}"
            logger.error(
                "remote_validation_failed",
                mode="delegated",
                url=url,
                status_code=response.status_code,
                error=detail,
            )
            raise RemoteValidationError(SERVER_ERROR_MESSAGE, detail=detail)

        try:
            return ValidationResult.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            logger.error(
                "remote_validation_failed",
                mode="delegated",
                url=url,
                error=str(e),
                response_preview=response.text[:500],
            )
            raise RemoteValidationError(SERVER_ERROR_MESSAGE, detail=str(e)) from e

    async def _post(self, url: str, body: dict) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.post(url, json=body)
        async with httpx.AsyncClient(timeout=self.settings.HTTP_TIMEOUT_SECONDS) as client:
            return await client.post(url, json=body)

    async def _validate_direct(
        self,
        kind: ShapeKind,
        shape_label: str,
        numeric_inputs: dict[str, Optional[float]],
    ) -> ValidationResult:
        """Ask the model directly; empty or malformed answers are faults."""
        try:
            return await self.agent.run(shape_label, numeric_inputs)
        except EmptyResponseError as e:
            logger.error("remote_validation_failed", mode="direct", shape=kind.value, error=str(e))
            raise RemoteValidationError(EMPTY_RESPONSE_MESSAGE, detail=str(e)) from e
        except Exception as e:
            logger.error(
                "remote_validation_failed",
                mode="direct",
                shape=kind.value,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise RemoteValidationError(AI_SERVICE_ERROR_MESSAGE, detail=str(e)) from e
