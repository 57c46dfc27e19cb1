from .patient_router import *
from .doctor_router import *
from .appointment_router import *
from .user_router import *
