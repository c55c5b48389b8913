import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from sqlalchemy import or_

from case_manager.database import get_db
from case_manager.models.call import Call
from case_manager.models.patient import Patient
from case_manager.models.user import User
from case_manager.schemas.patient import (
    PatientCreate,
    PatientUpdate,
    PatientResponse,
    PatientSearchResult,
    PatientSearchResults,
)
from case_manager.services.auth import get_current_user_required
from case_manager.services.call_log import edit_patient_path
from case_manager.services.formatting import normalize_phone

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/patients", tags=["patients"])


def _patient_response(db: Session, patient: Patient) -> PatientResponse:
    call_count = db.query(Call).filter(Call.patient_id == patient.id).count()
    return PatientResponse(
        id=patient.id,
        name=patient.name,
        primary_phone=patient.primary_phone,
        call_count=call_count,
        edit_path=edit_patient_path(patient.id),
        call_log_path=f"/api/patients/{patient.id}/calls",
        created_at=patient.created_at,
        updated_at=patient.updated_at,
    )


def _check_phone_available(db: Session, phone: str, patient_id: Optional[int] = None) -> None:
    """Reject a phone number already used by another patient."""
    query = db.query(Patient).filter(Patient.primary_phone == phone)
    if patient_id is not None:
        query = query.filter(Patient.id != patient_id)
    if query.first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Phone number already registered",
        )


@router.get("/search", response_model=PatientSearchResults)
def search_patients(
    search: str = Query("", description="Name or phone number to search for"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user_required),
):
    """Search patients by name or phone number."""
    term = search.strip()
    if not term:
        return PatientSearchResults(patients=[], total=0)

    # % and _ are literal characters in a search
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    search_term = f"%{escaped}%"
    filters = [
        Patient.name.ilike(search_term, escape="\\"),
        Patient.primary_phone.ilike(search_term, escape="\\"),
    ]

    # "1231231234" should still find 123-123-1234
    phone = normalize_phone(term)
    if phone:
        filters.append(Patient.primary_phone == phone)

    patients = db.query(Patient).filter(or_(*filters)).order_by(Patient.name).all()
    return PatientSearchResults(
        patients=[PatientSearchResult.model_validate(p) for p in patients],
        total=len(patients),
    )


@router.get("/by-phone/{phone}", response_model=PatientSearchResult)
def lookup_patient_by_phone(
    phone: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user_required),
):
    """Resolve a call anchor (``call-123-123-1234``) or phone number to a patient."""
    if phone.startswith("call-"):
        phone = phone[len("call-"):]
    normalized = normalize_phone(phone)
    if not normalized:
        raise HTTPException(status_code=404, detail="Patient not found")

    patient = db.query(Patient).filter(Patient.primary_phone == normalized).first()
    if not patient:
        raise HTTPException(status_code=404, detail="Patient not found")
    return PatientSearchResult.model_validate(patient)


@router.get("/{patient_id}", response_model=PatientResponse)
def get_patient(
    patient_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user_required),
):
    """Get a specific patient by ID."""
    patient = db.query(Patient).filter(Patient.id == patient_id).first()
    if not patient:
        raise HTTPException(status_code=404, detail="Patient not found")
    return _patient_response(db, patient)


@router.post("", response_model=PatientResponse, status_code=201)
def create_patient(
    patient_data: PatientCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user_required),
):
    """Create a new patient."""
    _check_phone_available(db, patient_data.primary_phone)

    patient = Patient(**patient_data.model_dump())
    db.add(patient)
    db.commit()
    db.refresh(patient)
    logger.info(f"Created patient {patient.id} by {current_user.username}")
    return _patient_response(db, patient)


@router.put("/{patient_id}", response_model=PatientResponse)
def update_patient(
    patient_id: int,
    patient_data: PatientUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user_required),
):
    """Update an existing patient."""
    patient = db.query(Patient).filter(Patient.id == patient_id).first()
    if not patient:
        raise HTTPException(status_code=404, detail="Patient not found")

    update_data = patient_data.model_dump(exclude_unset=True, exclude_none=True)
    if "primary_phone" in update_data:
        _check_phone_available(db, update_data["primary_phone"], patient_id=patient.id)

    for field, value in update_data.items():
        setattr(patient, field, value)

    db.commit()
    db.refresh(patient)
    return _patient_response(db, patient)
