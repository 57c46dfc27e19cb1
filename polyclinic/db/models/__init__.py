from .db_base_model import *
from .patient_table import *
from .doctor_table import *
from .appointment_table import *
from .user_table import *
from .id_sequence_table import *
