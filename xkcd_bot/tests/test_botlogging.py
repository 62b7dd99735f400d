"""
This is a file to test the botlogging package
This contains 6 tests
"""

from __future__ import annotations

from typing import Self
from unittest.mock import AsyncMock, MagicMock, patch

import botlogging
import pytest
from tests import config_for_tests, helpers


def setup_logger(private_channels: list[int] = None) -> botlogging.BotLogger:
    """A simple function to setup a discord enabled logger on a fake bot

    Args:
        private_channels (list[int], optional): Channels kept off discord. Defaults to None.

    Returns:
        botlogging.BotLogger: The logger
    """
    config = config_for_tests.file_config()
    config.logging.private_channels = private_channels or []
    config.logging.logging_channel = "500"
    bot = helpers.MockBot(file_config=config)
    return botlogging.BotLogger(discord_bot=bot, name="test", send=True)


class Test_CheckIfShouldLog:
    """Tests for the log filtering rules"""

    def test_debug_hidden(self: Self) -> None:
        """A test to ensure debug logs are dropped unless DEBUG is set"""
        # Step 1 - Setup env
        logger = setup_logger()

        # Step 2 - Call the function
        with patch.dict("os.environ", {"DEBUG": "0"}):
            hidden = logger.check_if_should_log(botlogging.LogLevel.DEBUG, None)
        with patch.dict("os.environ", {"DEBUG": "1"}):
            shown = logger.check_if_should_log(botlogging.LogLevel.DEBUG, None)

        # Step 3 - Assert that everything works
        assert not hidden
        assert shown

    def test_private_channel(self: Self) -> None:
        """A test to ensure warnings from private channels are dropped"""
        # Step 1 - Setup env
        logger = setup_logger(private_channels=[42])
        context = botlogging.LogContext(channel=MagicMock(id=42))

        # Step 2 - Call the function
        with patch.dict("os.environ", {"DEBUG": "0"}):
            result = logger.check_if_should_log(botlogging.LogLevel.WARNING, context)

        # Step 3 - Assert that everything works
        assert not result

    def test_private_channel_error(self: Self) -> None:
        """A test to ensure errors are logged even from private channels"""
        # Step 1 - Setup env
        logger = setup_logger(private_channels=[42])
        context = botlogging.LogContext(channel=MagicMock(id=42))

        # Step 2 - Call the function
        with patch.dict("os.environ", {"DEBUG": "0"}):
            result = logger.check_if_should_log(botlogging.LogLevel.ERROR, context)

        # Step 3 - Assert that everything works
        assert result


class Test_SendLog:
    """Tests for sending logs to discord"""

    @pytest.mark.asyncio
    async def test_sends_embed(self: Self) -> None:
        """A test to ensure a log lands in the logging channel as an embed"""
        # Step 1 - Setup env
        logger = setup_logger()
        channel = MagicMock()
        channel.send = AsyncMock()
        logger.bot.get_channel = MagicMock(return_value=channel)

        # Step 2 - Call the function
        await logger.send_log(message="hello", level=botlogging.LogLevel.INFO)

        # Step 3 - Assert that everything works
        logger.bot.get_channel.assert_called_once_with(500)
        embed = channel.send.call_args.kwargs["embed"]
        assert embed.description == "hello"

    @pytest.mark.asyncio
    async def test_console_only(self: Self) -> None:
        """A test to ensure console only logs never reach discord"""
        # Step 1 - Setup env
        logger = setup_logger()
        logger.bot.get_channel = MagicMock()

        # Step 2 - Call the function
        await logger.send_log(
            message="hello", level=botlogging.LogLevel.INFO, console_only=True
        )

        # Step 3 - Assert that everything works
        logger.bot.get_channel.assert_not_called()


class Test_DelayedLogger:
    """Tests for the queued logger"""

    @pytest.mark.asyncio
    async def test_queues(self: Self) -> None:
        """A test to ensure logs are queued rather than sent straight away"""
        # Step 1 - Setup env
        bot = helpers.MockBot(file_config=config_for_tests.file_config())
        logger = botlogging.DelayedLogger(
            discord_bot=bot, name="test", send=True, wait_time=1
        )
        logger.register_queue()

        # Step 2 - Call the function
        await logger.send_log(message="hello", level=botlogging.LogLevel.INFO)

        # Step 3 - Assert that everything works
        assert logger.send_queue.qsize() == 1
        (await logger.send_queue.get()).close()
