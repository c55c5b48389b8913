from case_manager.schemas.user import UserCreate, UserResponse, Token, TokenData, LoginRequest
from case_manager.schemas.patient import (
    PatientCreate, PatientUpdate, PatientResponse, PatientSearchResult, PatientSearchResults,
)
from case_manager.schemas.call import (
    CallOutcome, CallModal, CallCreate, CallResponse, CallCreated, CallLog,
)

__all__ = [
    "UserCreate", "UserResponse", "Token", "TokenData", "LoginRequest",
    "PatientCreate", "PatientUpdate", "PatientResponse", "PatientSearchResult", "PatientSearchResults",
    "CallOutcome", "CallModal", "CallCreate", "CallResponse", "CallCreated", "CallLog",
]
