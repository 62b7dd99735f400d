"""
Fetching and parsing of xkcd comic pages
This has no commands
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Self
from urllib.parse import urljoin

import discord
from botlogging import LogLevel
from bs4 import BeautifulSoup

if TYPE_CHECKING:
    import bot

MISSING_NUMBER = -1
MISSING_TITLE = "no comic title found"
MISSING_ALT_TEXT = "no alt text found"
MISSING_IMAGE_URL = "https://imgs.xkcd.com/comics/not_available.png"


@dataclass(frozen=True)
class Comic:
    """A single xkcd comic

    Attrs:
        number (int): The sequential number of the comic
        title (str): The display title
        alt_text (str): The hover text
        image_url (str): The absolute URL of the comic image
    """

    number: int
    title: str
    alt_text: str
    image_url: str

    def to_embed(self: Self) -> discord.Embed:
        """Renders this comic the way every command displays it

        Returns:
            discord.Embed: The embed to send
        """
        embed = discord.Embed(title=self.title, description=f"xkcd #{self.number}")
        embed.set_footer(text=self.alt_text)
        embed.set_image(url=self.image_url)
        return embed


@dataclass(frozen=True)
class ParsedComic:
    """A page that loaded, along with any fields that had to fall back

    Attrs:
        url (str): The page the comic was read from
        comic (Comic): The comic, possibly holding placeholder values
        anomalies (tuple[str, ...]): Names of the Comic fields that are placeholders
    """

    url: str
    comic: Comic
    anomalies: tuple[str, ...] = ()

    ok = True

    @property
    def complete(self: Self) -> bool:
        """True if every field came from the page"""
        return not self.anomalies


@dataclass(frozen=True)
class FetchFailure:
    """A page that could not be loaded

    Attrs:
        url (str): The URL that was requested
        status (int): The HTTP status code returned
    """

    url: str
    status: int

    ok = False


FetchResult = ParsedComic | FetchFailure


class ComicFetcher:
    """Loads comics off the xkcd website

    Args:
        bot (bot.XkcdBot): The bot object, for HTTP calls and logging
        base_url (str): The root of the comic site
        meta_selector (str): CSS selector for the tags that may carry the comic URL
        meta_index (int): Which of the selected tags holds the comic URL, 0 based
    """

    def __init__(
        self: Self,
        bot: bot.XkcdBot,
        base_url: str = "https://xkcd.com",
        meta_selector: str = "meta",
        meta_index: int = 3,
    ) -> None:
        self.bot = bot
        self.base_url = base_url.rstrip("/")
        self.meta_selector = meta_selector
        self.meta_index = meta_index

    @property
    def latest_url(self: Self) -> str:
        """The front page, which always shows the newest comic"""
        return f"{self.base_url}/"

    def comic_url(self: Self, number: int) -> str:
        """Builds the page URL for a comic number

        Args:
            number (int): The comic number

        Returns:
            str: The URL of the comic page
        """
        return f"{self.base_url}/{number}"

    async def fetch_by_number(self: Self, number: int) -> FetchResult:
        """Gets the comic with a specific number

        Args:
            number (int): The comic number

        Returns:
            FetchResult: The parsed comic or the failure
        """
        return await self.fetch_by_url(self.comic_url(number))

    async def fetch_latest(self: Self) -> FetchResult:
        """Gets the newest comic

        Returns:
            FetchResult: The parsed comic or the failure
        """
        return await self.fetch_by_url(self.latest_url)

    async def fetch_by_url(self: Self, url: str) -> FetchResult:
        """Gets and parses the comic page at a URL
        A bad status never raises, it comes back as a FetchFailure

        Args:
            url (str): The page to load

        Returns:
            FetchResult: The parsed comic or the failure
        """
        await self.bot.logger.send_log(
            message=f"Attempting to get xkcd comic from {url}",
            level=LogLevel.DEBUG,
            console_only=True,
        )
        response = await self.bot.http_functions.http_call("get", url)
        if response.status != 200:
            await self.bot.logger.send_log(
                message=f"Couldn't get comic from {url}! HTTP {response.status}",
                level=LogLevel.WARNING,
                console_only=True,
            )
            return FetchFailure(url=url, status=response.status)

        parsed = self.parse_page(url, response.text)
        if "number" in parsed.anomalies:
            await self.bot.logger.send_log(
                message=(
                    f"No comic number at {self.meta_selector}[{self.meta_index}]"
                    f" on {url}, the page layout may have changed"
                ),
                level=LogLevel.WARNING,
                console_only=True,
            )
        return parsed

    def parse_page(self: Self, url: str, html: str) -> ParsedComic:
        """Pulls the comic out of a page
        Anything missing is replaced with a placeholder and noted as an anomaly

        Args:
            url (str): The URL the page came from, used to resolve the image source
            html (str): The page body

        Returns:
            ParsedComic: The comic and its anomalies
        """
        soup = BeautifulSoup(html, "html.parser")
        anomalies = []

        number = self.parse_number(soup)
        if number is None:
            number = MISSING_NUMBER
            anomalies.append("number")

        image = soup.select_one("#comic img")
        fields = {}
        for field, attribute, placeholder in (
            ("title", "alt", MISSING_TITLE),
            ("alt_text", "title", MISSING_ALT_TEXT),
            ("image_url", "src", MISSING_IMAGE_URL),
        ):
            value = image.get(attribute) if image else None
            if not value:
                anomalies.append(field)
                value = placeholder
            elif field == "image_url":
                # xkcd uses protocol relative sources
                value = urljoin(url, value)
            fields[field] = value

        return ParsedComic(
            url=url,
            comic=Comic(number=number, **fields),
            anomalies=tuple(anomalies),
        )

    def parse_number(self: Self, soup: BeautifulSoup) -> int | None:
        """Reads the comic number from the canonical URL meta tag.
        The content looks like https://xkcd.com/<number>/

        Args:
            soup (BeautifulSoup): The parsed page

        Returns:
            int | None: The number, or None if the tag isn't where it should be
        """
        tags = soup.select(self.meta_selector)
        if not -len(tags) <= self.meta_index < len(tags):
            return None

        content = tags[self.meta_index].get("content") or ""
        segments = content.split("/")
        if len(segments) < 2:
            return None
        try:
            return int(segments[-2])
        except ValueError:
            return None
