"""
This is a file to test the core/names.py file
This contains 8 tests
"""

from __future__ import annotations

import asyncio
from typing import Self

import munch
import pytest
from core import custom_errors, names
from tests import config_for_tests, helpers


def setup_index(entries: list[tuple[int, str]] = None) -> names.NameIndex:
    """A simple function to setup a name index against a fake archive

    Args:
        entries (list[tuple[int, str]], optional): The archive listing. Defaults to None.

    Returns:
        names.NameIndex: The index, not yet built
    """
    pages = {}
    if entries is not None:
        pages[config_for_tests.ARCHIVE_URL] = config_for_tests.archive_page(entries)
    bot = helpers.MockBot(file_config=config_for_tests.file_config(), pages=pages)
    return names.NameIndex(bot, archive_url=config_for_tests.ARCHIVE_URL)


class Test_ParseArchive:
    """Tests for reading the archive listing"""

    def test_skips_other_links(self: Self) -> None:
        """A test to ensure only /<number>/ links make it into the index"""
        # Step 1 - Setup env
        page = config_for_tests.archive_page([(1, "Barrel - Part 1"), (2, "Petit Trees")])

        # Step 2 - Call the function
        result = names.NameIndex.parse_archive(page)

        # Step 3 - Assert that everything works
        assert result == {"barrel - part 1": 1, "petit trees": 2}

    def test_last_duplicate_wins(self: Self) -> None:
        """A test to ensure a repeated title maps to its last listing"""
        # Step 1 - Setup env
        page = config_for_tests.archive_page([(10, "Same"), (20, "same")])

        # Step 2 - Call the function
        result = names.NameIndex.parse_archive(page)

        # Step 3 - Assert that everything works
        assert result == {"same": 20}


class Test_Lookup:
    """Tests for rebuilding and searching the index"""

    @pytest.mark.asyncio
    async def test_lookup_after_rebuild(self: Self) -> None:
        """A test to ensure titles are found case insensitively"""
        # Step 1 - Setup env
        index = setup_index([(1, "Barrel - Part 1"), (353, "Python")])

        # Step 2 - Call the function
        await index.rebuild()

        # Step 3 - Assert that everything works
        assert index.lookup("PYTHON") == 353
        assert index.lookup("  barrel -   part 1 ") == 1
        assert len(index) == 2
        assert index.last_refresh is not None

    @pytest.mark.asyncio
    async def test_unknown_name(self: Self) -> None:
        """A test to ensure unknown titles are not found"""
        # Step 1 - Setup env
        index = setup_index([(353, "Python")])
        await index.rebuild()

        # Step 2 - Call the function
        result = index.lookup("Pythons")

        # Step 3 - Assert that everything works
        assert result is None

    @pytest.mark.asyncio
    async def test_rebuild_replaces(self: Self) -> None:
        """A test to ensure a rebuild drops titles that are no longer listed"""
        # Step 1 - Setup env
        index = setup_index([(1, "Old")])
        await index.rebuild()
        index.bot.http_functions.pages[config_for_tests.ARCHIVE_URL] = (
            config_for_tests.archive_page([(2, "New")])
        )

        # Step 2 - Call the function
        await index.rebuild()

        # Step 3 - Assert that everything works
        assert index.lookup("old") is None
        assert index.lookup("new") == 2

    @pytest.mark.asyncio
    async def test_archive_unavailable(self: Self) -> None:
        """A test to ensure a failed archive load raises and keeps the old index"""
        # Step 1 - Setup env
        index = setup_index([(1, "Old")])
        await index.rebuild()
        del index.bot.http_functions.pages[config_for_tests.ARCHIVE_URL]

        # Step 2 - Call the function
        with pytest.raises(custom_errors.ArchiveUnavailable):
            await index.rebuild()

        # Step 3 - Assert that everything works
        assert index.lookup("old") == 1

    @pytest.mark.asyncio
    async def test_lookup_during_rebuild(self: Self) -> None:
        """A test to ensure lookups see the old index while a rebuild is in flight"""
        # Step 1 - Setup env
        index = setup_index([(1, "Old")])
        await index.rebuild()
        release = asyncio.Event()

        async def slow_archive(method: str, url: str) -> munch.Munch:
            await release.wait()
            return munch.Munch(
                status=200, text=config_for_tests.archive_page([(1, "Old"), (2, "New")])
            )

        index.bot.http_functions.http_call = slow_archive

        # Step 2 - Call the function
        task = asyncio.create_task(index.rebuild())
        await asyncio.sleep(0)
        during = index.lookup("old")
        release.set()
        await task

        # Step 3 - Assert that everything works
        assert during == 1
        assert index.lookup("old") == 1
        assert index.lookup("new") == 2

    @pytest.mark.asyncio
    async def test_completion_logged(self: Self) -> None:
        """A test to ensure a finished rebuild is logged with the comic count"""
        # Step 1 - Setup env
        index = setup_index([(1, "A"), (2, "B"), (3, "C")])

        # Step 2 - Call the function
        await index.rebuild()

        # Step 3 - Assert that everything works
        messages = [
            call.kwargs["message"] for call in index.bot.logger.send_log.call_args_list
        ]
        assert "Finished updating comic name map (3 comics)" in messages
