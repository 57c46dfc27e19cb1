from .patient_schema import *
from .doctor_schema import *
from .appointment_schemas import *
from .user_schemas import *
