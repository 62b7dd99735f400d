"""Custom errors and the user facing responses for command errors"""

from __future__ import annotations

from typing import Self

import munch
from discord import app_commands


class ComicFetchError(app_commands.AppCommandError):
    """Raised when a comic the command can't do without fails to load

    Args:
        url (str): The URL that was requested
        status (int): The HTTP status that came back
    """

    def __init__(self: Self, url: str, status: int) -> None:
        self.dont_print_trace = True
        self.url = url
        self.status = status
        super().__init__(f"Fetching {url} returned HTTP {status}")


class ArchiveUnavailable(Exception):
    """Raised when the archive page can't be loaded for the name index

    Args:
        url (str): The archive URL that was requested
        status (int): The HTTP status that came back
    """

    def __init__(self: Self, url: str, status: int) -> None:
        self.url = url
        self.status = status
        super().__init__(f"Archive {url} returned HTTP {status}")


class ErrorResponse:
    """Object for generating a custom error message from an exception.

    Args:
        message_format (str): the substition formatted (%s) message
        lookups (str | list[str]): the exception attributes to substitute, in order
        dont_print_trace (bool): True if the stack trace should not be logged
    """

    DEFAULT_MESSAGE = "I ran into an error processing your command"

    def __init__(
        self: Self,
        message_format: str = None,
        lookups: str | list[str] = None,
        dont_print_trace: bool = False,
    ) -> None:
        self.message_format = message_format
        self.dont_print_trace = dont_print_trace

        if lookups:
            lookups = lookups if isinstance(lookups, list) else [lookups]
        else:
            lookups = []
        self.lookups = [munch.Munch(key=lookup) for lookup in lookups]

    def default_message(self: Self, exception: Exception = None) -> str:
        """Handles default message generation.

        Args:
            exception (Exception): the exception to reference

        Returns:
            str: The default message, with the exception if there is one
        """
        return (
            f"{self.DEFAULT_MESSAGE}: *{exception}*"
            if exception
            else self.DEFAULT_MESSAGE
        )

    def get_message(self: Self, exception: Exception = None) -> str:
        """Gets a response message from a given exception.

        Args:
            exception (Exception): the exception to reference

        Returns:
            str: The message to show the user
        """
        if not self.message_format:
            return self.default_message(exception=exception)

        values = [getattr(exception, lookup.key, "?") for lookup in self.lookups]
        try:
            return self.message_format % tuple(values)
        except TypeError:
            return self.default_message(exception=exception)


COMMAND_ERROR_RESPONSES = {
    ComicFetchError: ErrorResponse(
        "I had trouble loading xkcd (HTTP %s)", "status", dont_print_trace=True
    ),
    app_commands.BotMissingPermissions: ErrorResponse(
        "I am missing the permissions to do that: %s", "missing_permissions"
    ),
    app_commands.MissingPermissions: ErrorResponse(
        "You are missing the permissions to do that: %s", "missing_permissions"
    ),
    app_commands.CommandOnCooldown: ErrorResponse(
        "That command is on cooldown, try again in %.0f seconds", "retry_after"
    ),
}

IGNORED_ERRORS = {
    app_commands.CommandNotFound,
}
