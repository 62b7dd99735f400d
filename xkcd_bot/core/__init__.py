"""Module for providing base classes."""

from .auxiliary import *
from .cogs import *
from .comics import *
from .custom_errors import *
from .http import *
from .names import *
