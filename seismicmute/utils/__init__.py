"""Miscellaneous general utility functions"""

from .general_utils import *
from .file_utils import *
from .interpolation import *
