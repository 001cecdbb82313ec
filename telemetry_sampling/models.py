from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from .config import settings


class SampleRequest(BaseModel):
    readings: list[dict[str, Any]] = Field(..., description="Relevés triés par x (time/timestamp)")
    threshold: Optional[int] = Field(None, le=settings.points_max, description="Points en sortie (ramené à 3 minimum)")
    x_key: Optional[str] = None
    y_key: Optional[str] = None
    method: Literal["lttb", "uniform"] = "lttb"
    adaptive: bool = Field(False, description="N'échantillonne qu'au-delà de threshold, vers target_points")
    target_points: Optional[int] = Field(None, le=settings.points_max)


class SampleResponse(BaseModel):
    readings: list[dict[str, Any]]
    x_key: Optional[str] = None
    y_key: Optional[str] = None
    method: str
    original_points: int
    returned_points: int
    reduction_pct: float
    show_markers: bool
