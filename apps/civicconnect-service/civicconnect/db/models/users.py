import uuid
from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class User(Base):
    __tablename__ = 'users'
    user_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String, nullable=True, unique=True, index=True)
    phone_number = Column(String(32), nullable=True, unique=True, index=True)
    # Never store raw passwords; phone-login accounts have no password
    password_hash = Column(Text, nullable=True)
    # LOCAL|GOOGLE|APPLE
    provider = Column(String(20), nullable=False, default='LOCAL')
    # CITIZEN|OFFICIAL|ADMIN
    role = Column(String(20), nullable=False, default='CITIZEN', index=True)
    display_name = Column(String, nullable=True)
    fcm_token = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    reports = relationship(
        "Report",
        back_populates="user",
        cascade="all, delete-orphan",
    )
