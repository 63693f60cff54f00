from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class DashboardStats(BaseModel):
    """Dashboard aggregates; serialized with the camelCase keys the dashboard reads."""
    total: int
    open: int
    in_progress: int = Field(alias="inProgress")
    approved: int
    resolved: int
    rejected: int
    by_category: Dict[str, int] = Field(default_factory=dict, alias="byCategory")
    users_by_role: Dict[str, int] = Field(default_factory=dict, alias="usersByRole")
    avg_resolution_hours: Optional[float] = Field(default=None, alias="avgResolutionHours")
    avg_resolution_time: str = Field(default="N/A", alias="avgResolutionTime")
    ward_performance: Dict[str, int] = Field(default_factory=dict, alias="wardPerformance")
    model_config = ConfigDict(populate_by_name=True)


HeatmapPoints = List[List[float]]
