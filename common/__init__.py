# common/__init__.py
from .api_error import *
from .config import *
from .context_vars import *
from .logger import *
