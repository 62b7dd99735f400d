"""
Defines the wrapper around aiohttp used for every outbound request
This has no commands
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Self

import aiohttp
import munch
from botlogging import LogLevel

if TYPE_CHECKING:
    import bot


class HTTPCalls:
    """
    This requires a class so it can store the bot variable upon setup
    This allows access to logging

    Args:
        bot (bot.XkcdBot): The bot object, used for logging
    """

    def __init__(self: Self, bot: bot.XkcdBot) -> None:
        self.bot = bot

    async def http_call(
        self: Self, method: str, url: str, *args: tuple, **kwargs: dict
    ) -> munch.Munch:
        """Makes an HTTP request and reads the body as text.
        Nothing is cached and nothing is retried.

        Args:
            method (str): the HTTP method to use
            url (str): the URL to call
            *args (tuple): Passed to the aiohttp request
            **kwargs (dict): Passed to the aiohttp request

        Returns:
            munch.Munch: The response, with status and text keys
        """
        method = method.lower()

        await self.bot.logger.send_log(
            message=f"Making HTTP {method.upper()} request to URL: {url}",
            level=LogLevel.DEBUG,
            console_only=True,
        )

        async with aiohttp.ClientSession() as client:
            method_fn = getattr(client, method)
            async with method_fn(url, *args, **kwargs) as response_object:
                return await self.process_http_response(response_object)

    async def process_http_response(
        self: Self, response_object: aiohttp.ClientResponse
    ) -> munch.Munch:
        """Reads the body out of the response before the session closes

        Args:
            response_object (aiohttp.ClientResponse): The raw response object

        Returns:
            munch.Munch: The response object ready for use
        """
        return munch.Munch(
            status=response_object.status,
            text=await response_object.text(),
        )
