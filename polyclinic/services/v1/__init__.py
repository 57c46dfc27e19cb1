from .patient_service import *
from .doctor_service import *
from .appointment_service import *
from .authentication_service import *
