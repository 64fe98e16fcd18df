"""Tests for roster extraction from league and tournament pages."""

from __future__ import annotations

import os

from bs4 import BeautifulSoup

from tap_mch_users.layouts import (
    LeagueLayout,
    TournamentLayout,
    detect_layout,
    extract_roster,
)
from tap_mch_users.models import UserRef

FIXTURES = os.path.join(os.path.dirname(__file__), "fixtures")


def _read(name: str) -> str:
    with open(os.path.join(FIXTURES, name), "r", encoding="utf-8") as f:
        return f.read()


# --- League layout ---

def test_league_extracts_valid_entries_in_order():
    users = extract_roster(_read("league_page.html"))
    assert users == [
        UserRef(user_name="ゆきち", user_id="1001"),
        UserRef(user_name='Hero "Two"', user_id="1002"),
        UserRef(user_name="いぬ", user_id="1006"),
    ]


def test_league_strips_hash_and_whitespace():
    html = '<li class="groupUserList__item"><span>  Name </span><span> #42 </span></li>'
    users = LeagueLayout().extract(BeautifulSoup(html, "html.parser"))
    assert users == [UserRef(user_name="Name", user_id="42")]


def test_league_skips_items_with_single_span():
    html = '<li class="groupUserList__item"><span>Lonely</span></li>'
    assert LeagueLayout().extract(BeautifulSoup(html, "html.parser")) == []


# --- Tournament layout ---

def test_tournament_reads_first_round_only():
    users = extract_roster(_read("tournament_page.html"))
    assert [u.user_id for u in users] == ["2001", "2002", "2003"]
    assert users[1] == UserRef(user_name="Beta", user_id="2002")


def test_tournament_excludes_empty_slots():
    soup = BeautifulSoup(_read("tournament_page.html"), "html.parser")
    users = TournamentLayout().extract(soup)
    assert "0" not in {u.user_id for u in users}
    assert "---" not in {u.user_name for u in users}


def test_tournament_excludes_entries_without_link_or_uid():
    soup = BeautifulSoup(_read("tournament_page.html"), "html.parser")
    names = {u.user_name for u in TournamentLayout().extract(soup)}
    assert "Unlinked" not in names
    assert "NoUid" not in names


# --- Detection ---

def test_detect_prefers_league_when_it_yields_users():
    html = _read("league_page.html") + _read("tournament_page.html")
    layout = detect_layout(BeautifulSoup(html, "html.parser"))
    assert layout is not None
    assert layout.name == "league"


def test_detect_falls_back_to_tournament_when_league_is_empty():
    """A league container with no valid entries should not win."""
    html = (
        '<li class="groupUserList__item"><span></span><span>#1</span></li>'
        + _read("tournament_page.html")
    )
    layout = detect_layout(BeautifulSoup(html, "html.parser"))
    assert layout is not None
    assert layout.name == "tournament"


def test_no_layout_returns_empty_list():
    assert extract_roster("<html><body><p>Maintenance</p></body></html>") == []
    assert extract_roster("") == []


def test_every_extracted_entry_has_name_and_id():
    for page in ("league_page.html", "tournament_page.html"):
        for user in extract_roster(_read(page)):
            assert user.user_name
            assert user.user_id
            assert not user.user_id.startswith("#")


def test_tournament_slot_that_is_itself_the_link():
    html = (
        '<div class="tournament__tournament__round">'
        '<a class="userName" href="/u/1">'
        '<span class="userName__name">A</span><span class="userName__uid">#1</span>'
        "</a></div>"
    )
    users = TournamentLayout().extract(BeautifulSoup(html, "html.parser"))
    assert users == [UserRef(user_name="A", user_id="1")]


def test_tournament_link_slot_with_empty_marker_is_excluded():
    html = (
        '<div class="tournament__tournament__round">'
        '<a class="userName" href="/u/1">'
        '<div class="tournamentMatch__user--empty"></div>'
        '<span class="userName__name">A</span><span class="userName__uid">#1</span>'
        "</a></div>"
    )
    assert TournamentLayout().extract(BeautifulSoup(html, "html.parser")) == []
