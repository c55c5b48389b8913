from pydantic import BaseModel, field_validator
from typing import Optional, List
from datetime import datetime

from case_manager.services.formatting import normalize_phone


def _check_phone(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    normalized = normalize_phone(value)
    if normalized is None:
        raise ValueError("Phone number must contain 10 digits")
    return normalized


def _check_name(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ValueError("Name cannot be blank")
    return value


class PatientBase(BaseModel):
    name: str
    primary_phone: str

    @field_validator("name")
    @classmethod
    def check_name(cls, value):
        return _check_name(value)

    @field_validator("primary_phone")
    @classmethod
    def check_phone(cls, value):
        return _check_phone(value)


class PatientCreate(PatientBase):
    pass


class PatientUpdate(BaseModel):
    name: Optional[str] = None
    primary_phone: Optional[str] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, value):
        return _check_name(value)

    @field_validator("primary_phone")
    @classmethod
    def check_phone(cls, value):
        return _check_phone(value)


class PatientResponse(PatientBase):
    id: int
    call_count: int = 0
    edit_path: str
    call_log_path: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PatientSearchResult(BaseModel):
    """A search hit, with the key of its call action."""
    id: int
    name: str
    primary_phone: str
    call_anchor: str

    class Config:
        from_attributes = True


class PatientSearchResults(BaseModel):
    patients: List[PatientSearchResult]
    total: int
