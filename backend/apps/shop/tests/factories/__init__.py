from .accounts import *
from .catalog import *
from .orders import *
