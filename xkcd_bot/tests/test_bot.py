"""
This is a file to test the config loading and error handling in bot.py
This contains 7 tests
"""

from __future__ import annotations

from typing import Self

import bot
import pytest
import yaml
from core import custom_errors
from discord import app_commands
from tests import config_for_tests, helpers


def setup_bare_bot(config_path: str = None) -> bot.XkcdBot:
    """Creates a bot object without connecting or loading anything

    Args:
        config_path (str, optional): The config file to point at. Defaults to None.

    Returns:
        bot.XkcdBot: The bot object, with a mock logger
    """
    bot_ = bot.XkcdBot.__new__(bot.XkcdBot)
    bot_.logger = helpers.MockLogger()
    if config_path:
        bot_.CONFIG_PATH = config_path
    return bot_


class Test_FileConfig:
    """Tests for loading the yaml config"""

    def test_load(self: Self, tmp_path) -> None:
        """A test to ensure a complete config loads into a munch

        Args:
            tmp_path (pathlib.Path): A temporary directory
        """
        # Step 1 - Setup env
        path = tmp_path / "config.yml"
        path.write_text(yaml.safe_dump(config_for_tests.TEST_CONFIG))
        bot_ = setup_bare_bot(str(path))

        # Step 2 - Call the function
        bot_.load_file_config()

        # Step 3 - Assert that everything works
        assert bot_.file_config.xkcd.meta_index == 3
        assert bot_.file_config.bot_config.auth_token == "token"
        assert bot_.file_config.not_a_section is None

    def test_missing_token(self: Self, tmp_path) -> None:
        """A test to ensure a missing token stops startup

        Args:
            tmp_path (pathlib.Path): A temporary directory
        """
        # Step 1 - Setup env
        config = config_for_tests.file_config().toDict()
        config["bot_config"]["auth_token"] = None
        path = tmp_path / "config.yml"
        path.write_text(yaml.safe_dump(config))
        bot_ = setup_bare_bot(str(path))

        # Step 2 - Call the function
        with pytest.raises(ValueError, match="auth_token"):
            bot_.load_file_config()

    def test_default_guild(self: Self) -> None:
        """A test to ensure a bad default guild falls back to global registration"""
        # Step 1 - Setup env
        bot_ = setup_bare_bot()
        bot_.file_config = config_for_tests.file_config()

        # Step 2 - Call the function
        bot_.file_config.bot_config.default_guild = "not a guild"
        invalid = bot_.get_default_guild()
        bot_.file_config.bot_config.default_guild = "1234"
        valid = bot_.get_default_guild()

        # Step 3 - Assert that everything works
        assert invalid is None
        assert valid.id == 1234


class Test_HandleError:
    """Tests for turning command errors into user facing messages"""

    @pytest.mark.asyncio
    async def test_comic_fetch_error(self: Self) -> None:
        """A test to ensure a failed comic load gets its own message"""
        # Step 1 - Setup env
        bot_ = setup_bare_bot()
        error = custom_errors.ComicFetchError("https://xkcd.com/", 503)

        # Step 2 - Call the function
        message = await bot_.handle_error(exception=error, channel=None, guild=None)

        # Step 3 - Assert that everything works
        assert message == "I had trouble loading xkcd (HTTP 503)"

    @pytest.mark.asyncio
    async def test_wrapped_error(self: Self) -> None:
        """A test to ensure errors raised in a command body are unwrapped"""
        # Step 1 - Setup env
        bot_ = setup_bare_bot()
        original = RuntimeError("boom")
        error = app_commands.CommandInvokeError.__new__(
            app_commands.CommandInvokeError
        )
        error.original = original

        # Step 2 - Call the function
        message = await bot_.handle_error(exception=error, channel=None, guild=None)

        # Step 3 - Assert that everything works
        assert message == "I ran into an error processing your command: *boom*"
        assert bot_.logger.send_log.call_args.kwargs["exception"] is original

    @pytest.mark.asyncio
    async def test_ignored_error(self: Self) -> None:
        """A test to ensure ignored errors get no response"""
        # Step 1 - Setup env
        bot_ = setup_bare_bot()
        error = app_commands.CommandNotFound("xkcd", [])

        # Step 2 - Call the function
        message = await bot_.handle_error(exception=error, channel=None, guild=None)

        # Step 3 - Assert that everything works
        assert message is None
        bot_.logger.send_log.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_long_error(self: Self) -> None:
        """A test to ensure long error messages are cut down"""
        # Step 1 - Setup env
        bot_ = setup_bare_bot()
        error = RuntimeError("x" * 2000)

        # Step 2 - Call the function
        message = await bot_.handle_error(exception=error, channel=None, guild=None)

        # Step 3 - Assert that everything works
        assert len(message) == 1003
        assert message.endswith("...")
