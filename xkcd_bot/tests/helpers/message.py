"""
This is a file to store the fake discord.Message object
"""

from __future__ import annotations

from typing import Self
from unittest.mock import AsyncMock


class MockMessage:
    """
    This is the MockMessage class

    Functions implemented:
        edit() -> an AsyncMock, so edits can be asserted on

    Args:
        input_id (int): An integer containing the ID of the message
        embed (discord.Embed): The embed the message was sent with
    """

    def __init__(self: Self, input_id: int = None, embed: object = None) -> None:
        self.id = input_id
        self.embed = embed
        self.edit = AsyncMock()
