"""
Call logging for patients.

A user opens the call modal for a patient, picks one of three outcomes, and
the outcome is stored as a Call. Calls are append-only: each pick creates a
new row and the patient's call log lists every row, most recent first.
"""

import logging
from typing import List, NamedTuple

from sqlalchemy.orm import Session, joinedload

from case_manager.models.call import Call, CallStatus
from case_manager.models.patient import Patient
from case_manager.models.user import User
from case_manager.schemas.call import CallModal, CallOutcome, CallResponse
from case_manager.services.formatting import display_date, display_time

logger = logging.getLogger(__name__)

AUTHENTICATED_ROOT_PATH = "/"


class Outcome(NamedTuple):
    status: CallStatus
    link_text: str
    label: str


# Modal order
OUTCOMES = (
    Outcome(CallStatus.REACHED_PATIENT, "I reached the patient", "Reached patient"),
    Outcome(CallStatus.LEFT_VOICEMAIL, "I left a voicemail for the patient", "Left voicemail"),
    Outcome(CallStatus.COULDNT_REACH_PATIENT, "I couldn't reach the patient", "Couldn't reach patient"),
)

_LABELS = {outcome.status: outcome.label for outcome in OUTCOMES}


class PatientNotFoundError(Exception):
    def __init__(self, patient_id: int):
        super().__init__(f"Patient {patient_id} not found")
        self.patient_id = patient_id


def edit_patient_path(patient_id: int) -> str:
    return f"/patients/{patient_id}/edit"


def status_label(status: CallStatus) -> str:
    return _LABELS[status]


def get_patient(db: Session, patient_id: int) -> Patient:
    patient = db.query(Patient).filter(Patient.id == patient_id).first()
    if not patient:
        raise PatientNotFoundError(patient_id)
    return patient


def open_call_modal(patient: Patient) -> CallModal:
    """Build the call modal shown for a patient."""
    return CallModal(
        patient_id=patient.id,
        patient_name=patient.name,
        prompt=f"Call {patient.name} now:",
        primary_phone=patient.primary_phone,
        call_anchor=patient.call_anchor,
        outcomes=[
            CallOutcome(status=o.status, link_text=o.link_text, label=o.label)
            for o in OUTCOMES
        ],
    )


def record_call(db: Session, patient: Patient, user: User, status: CallStatus) -> Call:
    """Store one call attempt made by ``user``."""
    call = Call(patient_id=patient.id, user_id=user.id, status=status)
    db.add(call)
    db.commit()
    db.refresh(call)
    logger.info(
        f"Logged call {call.id}: patient={patient.id} status={status.value} user={user.username}"
    )
    return call


def redirect_after(status: CallStatus, patient_id: int) -> str:
    """
    Where the client goes once an outcome was logged.

    Reaching the patient opens their record; the other outcomes close the
    modal and stay on the authenticated root.
    """
    if status == CallStatus.REACHED_PATIENT:
        return edit_patient_path(patient_id)
    return AUTHENTICATED_ROOT_PATH


def list_calls(db: Session, patient_id: int) -> List[Call]:
    return (
        db.query(Call)
        .options(joinedload(Call.user))
        .filter(Call.patient_id == patient_id)
        .order_by(Call.created_at.desc(), Call.id.desc())
        .all()
    )


def call_to_response(call: Call) -> CallResponse:
    return CallResponse(
        id=call.id,
        patient_id=call.patient_id,
        status=call.status,
        label=status_label(call.status),
        created_at=call.created_at,
        display_date=display_date(call.created_at),
        display_time=display_time(call.created_at),
        user_id=call.user_id,
        user_name=call.user.name,
    )
