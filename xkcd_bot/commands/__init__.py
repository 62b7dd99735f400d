"""
This is the folder for all cogs that contain commands
Every file in here is loaded as an extension on startup
"""

from .xkcd import *
