"""Roster extraction for the two MCH page layouts.

Arena pages list their members in a league table; tournament pages show a
bracket whose first round contains every entrant. Both are parsed from the
rendered HTML with CSS selectors.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from bs4 import BeautifulSoup, Tag

from tap_mch_users.models import UserRef

logger = logging.getLogger(__name__)


class RosterNotFoundError(RuntimeError):
    """Raised when neither page layout yields a single user."""


def _clean_name(text: str) -> str:
    return text.strip()


def _clean_id(text: str) -> str:
    return text.strip().removeprefix("#")


def _valid(ref: UserRef) -> bool:
    return bool(ref.user_name and ref.user_id)


class PageLayout(ABC):
    """A page structure the roster can be read from."""

    name: str = ""
    container_selector: str = ""

    def matches(self, soup: BeautifulSoup) -> bool:
        """Return True if the layout's container is present on the page."""
        return soup.select_one(self.container_selector) is not None

    @abstractmethod
    def extract(self, soup: BeautifulSoup) -> list[UserRef]:
        """Return the valid roster entries, in page order."""


class LeagueLayout(PageLayout):
    """Arena (league) member list: ``.groupUserList__item`` rows of spans."""

    name = "league"
    container_selector = ".groupUserList__item"

    def extract(self, soup: BeautifulSoup) -> list[UserRef]:
        users: list[UserRef] = []
        for item in soup.select(self.container_selector):
            spans = item.select("span")
            if len(spans) < 2:
                continue
            ref = UserRef(
                user_name=_clean_name(spans[0].get_text()),
                user_id=_clean_id(spans[1].get_text()),
            )
            if _valid(ref):
                users.append(ref)
        return users


class TournamentLayout(PageLayout):
    """Tournament bracket: entrants are read from the first round only."""

    name = "tournament"
    container_selector = ".tournament__tournament__round"
    empty_slot_selector = ".tournamentMatch__user--empty"

    def extract(self, soup: BeautifulSoup) -> list[UserRef]:
        first_round = soup.select_one(self.container_selector)
        if first_round is None:
            return []

        users: list[UserRef] = []
        for el in first_round.select(".userName"):
            ref = self._parse_slot(el)
            if ref is not None and _valid(ref):
                users.append(ref)
        return users

    def _parse_slot(self, el: Tag) -> UserRef | None:
        link = el if el.name == "a" else el.find_parent("a")
        # Unfilled bracket slots are rendered as links with an empty marker
        if link is None or link.select_one(self.empty_slot_selector) is not None:
            return None

        name_el = el.select_one(".userName__name")
        uid_el = el.select_one(".userName__uid")
        if name_el is None or uid_el is None:
            return None

        return UserRef(
            user_name=_clean_name(name_el.get_text()),
            user_id=_clean_id(uid_el.get_text()),
        )


LAYOUTS: tuple[PageLayout, ...] = (LeagueLayout(), TournamentLayout())


def detect_layout(soup: BeautifulSoup) -> PageLayout | None:
    """Pick the first layout, league before tournament, that yields users."""
    for layout in LAYOUTS:
        if layout.matches(soup) and layout.extract(soup):
            return layout
    return None


def extract_roster(html: str) -> list[UserRef]:
    """Parse a rendered page and return its roster, or [] if none is found."""
    soup = BeautifulSoup(html, "html.parser")
    layout = detect_layout(soup)
    if layout is None:
        logger.info("No roster layout matched the page")
        return []

    users = layout.extract(soup)
    logger.info("Extracted %d users from %s layout", len(users), layout.name)
    return users
