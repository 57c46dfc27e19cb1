from .patient_repository import *
from .doctor_repository import *
from .appointment_repository import *
from .id_sequence_repository import *
from .user_repository import *
