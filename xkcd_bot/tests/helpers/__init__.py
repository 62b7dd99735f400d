"""Fake discord and bot objects for the unit tests"""

from .bot import MockBot, MockHTTP, MockLogger
from .interaction import MockFollowup, MockInteraction, MockInteractionResponse
from .message import MockMessage
