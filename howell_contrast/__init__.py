from .errors import *
from .utils import *
from .contrast import *
from .simulate import *
from .data import *
from .models import *
from .plots import *
