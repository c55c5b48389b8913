from pydantic import BaseModel
from typing import List
from datetime import datetime
from case_manager.models.call import CallStatus


class CallOutcome(BaseModel):
    status: CallStatus
    link_text: str
    label: str


class CallModal(BaseModel):
    """Contents of the call modal for one patient."""
    patient_id: int
    patient_name: str
    prompt: str
    primary_phone: str
    call_anchor: str
    outcomes: List[CallOutcome]


class CallCreate(BaseModel):
    status: CallStatus


class CallResponse(BaseModel):
    id: int
    patient_id: int
    status: CallStatus
    label: str
    created_at: datetime
    display_date: str
    display_time: str
    user_id: int
    user_name: str


class CallCreated(BaseModel):
    call: CallResponse
    redirect_to: str
    modal_open: bool = False


class CallLog(BaseModel):
    patient_id: int
    patient_name: str
    calls: List[CallResponse]
    total: int
