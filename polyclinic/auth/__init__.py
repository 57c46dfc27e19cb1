from .passwords import *
from .jwt_tokens import *
