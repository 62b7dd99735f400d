"""Interactive discord views"""

from .navigator import *
