from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from case_manager.database import Base


class Patient(Base):
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False, index=True)
    primary_phone = Column(String(12), unique=True, nullable=False, index=True)  # XXX-XXX-XXXX, keys the call action
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    calls = relationship("Call", back_populates="patient", order_by="Call.id")

    @property
    def call_anchor(self) -> str:
        return f"call-{self.primary_phone}"
