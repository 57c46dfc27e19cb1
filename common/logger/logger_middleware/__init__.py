from .logger_middleware import *
from .middleware_types import *
from .request_timer import *
