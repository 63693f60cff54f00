import uuid
from sqlalchemy import Column, String, Text, DateTime, Float, Integer, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class Report(Base):
    __tablename__ = 'reports'
    report_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False)
    title = Column(String(200), nullable=True)
    category = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String, nullable=True)
    # Remote URL or inline data URL
    image_url = Column(Text, nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    ward_id = Column(Integer, nullable=True)
    # OPEN|IN_PROGRESS|APPROVED|RESOLVED|REJECTED
    status = Column(String(20), nullable=False, default='OPEN')
    assigned_department = Column(String, nullable=True)
    ai_label = Column(String(100), nullable=True)
    ai_confidence = Column(Float, nullable=True)
    resolved_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    user = relationship("User", back_populates="reports")

    __table_args__ = (
        Index('ix_reports_status', 'status'),
        Index('ix_reports_category', 'category'),
        Index('ix_reports_user_id_created_at', 'user_id', 'created_at'),
        Index('ix_reports_created_at', 'created_at'),
    )
