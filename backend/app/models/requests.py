"""API request models."""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ValidateShapeRequest(BaseModel):
    """Request to validate measurements for one shape.

    `shape` stays a plain string so unknown tokens reach the validator and
    come back as a normal "not recognized" result instead of a 422.
    """

    model_config = ConfigDict(populate_by_name=True)

    shape: str = Field(..., description="Shape token, e.g. 'square' or 'right_triangle'")
    inputs: dict[str, Union[float, str, None]] = Field(
        default_factory=dict,
        description="Field name → measurement",
        examples=[{"a": 3, "b": 4, "c": 5}],
    )
    shape_label: Optional[str] = Field(
        default=None,
        alias="shapeLabel",
        description="Display label sent by delegating clients; informational only",
    )
