from case_manager.models.user import User
from case_manager.models.patient import Patient
from case_manager.models.call import Call, CallStatus

__all__ = ["User", "Patient", "Call", "CallStatus"]
