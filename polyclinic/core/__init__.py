from .outcomes import *
from .id_generator import *
from .conflict_checker import *
from .mappers import *
