import uuid
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from civicconnect.utils.roles import ReportStatus


class ReportBase(BaseModel):
    title: Optional[str] = Field(default=None, max_length=200)
    category: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None
    location: str = Field(min_length=1)
    image_url: str = Field(min_length=1)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    ward_id: Optional[int] = None

    @field_validator("category", "location", "image_url")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        s = v.strip()
        if not s:
            raise ValueError("must not be blank")
        return s


class ReportCreate(ReportBase):
    pass


class Report(BaseModel):
    report_id: uuid.UUID
    user_id: uuid.UUID
    title: Optional[str] = None
    category: str
    description: Optional[str] = None
    location: Optional[str] = None
    image_url: str
    latitude: float
    longitude: float
    ward_id: Optional[int] = None
    status: ReportStatus
    assigned_department: Optional[str] = None
    ai_label: Optional[str] = None
    ai_confidence: Optional[float] = None
    resolved_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class ReportWithDistance(Report):
    distance_km: Optional[float] = None


class ReportStatusUpdate(BaseModel):
    status: ReportStatus


class DepartmentAssignment(BaseModel):
    department: str = Field(min_length=1, max_length=200)

    @field_validator("department")
    @classmethod
    def _strip(cls, v: str) -> str:
        s = v.strip()
        if not s:
            raise ValueError("department must not be blank")
        return s


class RoutingSuggestion(BaseModel):
    report_id: uuid.UUID
    category: str
    department: str
    assigned_department: Optional[str] = None
