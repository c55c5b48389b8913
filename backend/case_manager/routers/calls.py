from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from case_manager.database import get_db
from case_manager.models.patient import Patient
from case_manager.models.user import User
from case_manager.schemas.call import CallModal, CallCreate, CallCreated, CallLog
from case_manager.services.auth import get_current_user_required
from case_manager.services import call_log

router = APIRouter(prefix="/patients", tags=["calls"])


def _get_patient_or_404(db: Session, patient_id: int) -> Patient:
    try:
        return call_log.get_patient(db, patient_id)
    except call_log.PatientNotFoundError:
        raise HTTPException(status_code=404, detail="Patient not found")


@router.get("/{patient_id}/call", response_model=CallModal)
def open_call_modal(
    patient_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user_required),
):
    """Contents of the call modal: prompt, phone number and the three outcomes."""
    patient = _get_patient_or_404(db, patient_id)
    return call_log.open_call_modal(patient)


@router.post("/{patient_id}/calls", response_model=CallCreated, status_code=201)
def record_call(
    patient_id: int,
    call_data: CallCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user_required),
):
    """Log the outcome of a call to the patient. The caller is the current user."""
    patient = _get_patient_or_404(db, patient_id)
    call = call_log.record_call(db, patient, current_user, call_data.status)
    return CallCreated(
        call=call_log.call_to_response(call),
        redirect_to=call_log.redirect_after(call.status, patient.id),
        modal_open=False,
    )


@router.get("/{patient_id}/calls", response_model=CallLog)
def get_call_log(
    patient_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user_required),
):
    """List every call logged for the patient, most recent first."""
    patient = _get_patient_or_404(db, patient_id)
    calls = call_log.list_calls(db, patient.id)
    return CallLog(
        patient_id=patient.id,
        patient_name=patient.name,
        calls=[call_log.call_to_response(c) for c in calls],
        total=len(calls),
    )
