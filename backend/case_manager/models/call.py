from datetime import datetime, timezone
from sqlalchemy import Column, Integer, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from case_manager.database import Base
import enum


class CallStatus(str, enum.Enum):
    REACHED_PATIENT = "reached_patient"
    LEFT_VOICEMAIL = "left_voicemail"
    COULDNT_REACH_PATIENT = "couldnt_reach_patient"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Call(Base):
    """One logged phone call attempt. Rows are never updated or deleted."""

    __tablename__ = "calls"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    status = Column(Enum(CallStatus), nullable=False)

    # UTC, assigned by the application at insert
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)

    # Relationships
    patient = relationship("Patient", back_populates="calls")
    user = relationship("User", back_populates="calls")
