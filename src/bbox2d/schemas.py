"""Serialization schema for bounding boxes."""

from pydantic import BaseModel, model_validator


class BoundingBoxSchema(BaseModel):
    """An axis-aligned bounding box as four named extremas."""

    xmin: float
    xmax: float
    ymin: float
    ymax: float

    @model_validator(mode="after")
    def check_ordering(self) -> "BoundingBoxSchema":
        """Reject extremas with xmin > xmax or ymin > ymax, and NaN extremas."""
        if not self.xmin <= self.xmax:
            raise ValueError(f"xmin ({self.xmin}) must not exceed xmax ({self.xmax})")
        if not self.ymin <= self.ymax:
            raise ValueError(f"ymin ({self.ymin}) must not exceed ymax ({self.ymax})")
        return self
