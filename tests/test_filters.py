"""Tests for listing policy, kid-safe screening and section time filters."""

from datetime import date

import pytest

from gamerly.models.filters import TimeFilterState
from gamerly.services.filters import (
    apply_time_filter,
    filter_results,
    has_banned_terms,
    is_kid_safe,
    parse_release_date,
)

TODAY = date(2024, 6, 15)


def _game(name, released="2022-02-25", slug=None):
    return {"name": name, "slug": slug or name.lower().replace(" ", "-"), "released": released}


# ── Listing policy ───────────────────────────────────────────────────────────


class TestFilterResults:
    def test_banned_terms_removed_exactly(self):
        games = [
            _game("Elden Ring"),
            _game("Hentai Quest"),
            _game("SeXy Beach"),
            _game("Harmless Title", slug="porn-game-deluxe"),
            _game("NUDE Island"),
            _game("Hades II"),
            _game("Erotic Tales", slug="tales"),
            _game("Balatro"),
        ]
        kept = [g["name"] for g in filter_results(games, TODAY)]
        assert kept == ["Elden Ring", "Hades II", "Balatro"]

    def test_future_release_excluded(self):
        games = [_game("Tomorrow", "2024-06-16"), _game("Today", "2024-06-15")]
        assert [g["name"] for g in filter_results(games, TODAY)] == ["Today"]

    def test_missing_or_invalid_release_excluded(self):
        games = [_game("No Date", None), _game("Bad Date", "soon"), _game("Empty", "")]
        assert filter_results(games, TODAY) == []

    def test_release_year_floor(self):
        games = [_game("Old", "2017-12-31"), _game("Edge", "2018-01-01")]
        assert [g["name"] for g in filter_results(games, TODAY)] == ["Edge"]

    def test_custom_year_floor(self):
        games = [_game("Old", "2010-05-01")]
        assert len(filter_results(games, TODAY, min_year=2000)) == 1

    def test_has_banned_terms_case_insensitive(self):
        assert has_banned_terms({"name": "BdSm Club"})
        assert not has_banned_terms({"name": "Celeste", "slug": None})


class TestParseReleaseDate:
    def test_plain_date(self):
        assert parse_release_date("2024-06-15") == TODAY

    def test_iso_timestamp(self):
        assert parse_release_date("2024-06-15T00:00:00.000Z") == TODAY

    @pytest.mark.parametrize("value", [None, "", "TBA", 20240615])
    def test_unparseable(self, value):
        assert parse_release_date(value) is None


# ── Kid-safe screen ──────────────────────────────────────────────────────────


class TestKidSafe:
    def _clean(self, **overrides):
        game = {
            "name": "Balatro",
            "esrb_rating": {"name": "Everyone 10+"},
            "tags": [{"name": "Singleplayer"}],
            "genres": [{"name": "Card"}],
            "developers": [{"name": "LocalThunk"}],
            "publishers": [{"name": "Playstack"}],
        }
        game.update(overrides)
        return game

    def test_clean_game_passes(self):
        assert is_kid_safe(self._clean())

    def test_mature_rating_blocked(self):
        assert not is_kid_safe(self._clean(esrb_rating={"name": "Mature"}))

    def test_adult_keyword_in_name_blocked(self):
        assert not is_kid_safe(self._clean(name="Strip Poker Night"))

    def test_adult_tag_blocked(self):
        assert not is_kid_safe(self._clean(tags=[{"name": "NSFW"}]))

    def test_adult_publisher_blocked(self):
        assert not is_kid_safe(self._clean(publishers=[{"name": "Nutaku Publishing"}]))

    def test_missing_optional_fields(self):
        assert is_kid_safe({"name": "Celeste", "esrb_rating": None, "tags": None})

    def test_empty_game_rejected(self):
        assert not is_kid_safe(None)
        assert not is_kid_safe({})


# ── Section time filter ──────────────────────────────────────────────────────


def _dated(name, day):
    return {"name": name, "releaseDate": f"{day}T00:00:00.000Z" if day else None}


def _names(games):
    return [g["name"] for g in games]


class TestTimeFilter:
    games = [
        _dated("past-40", "2024-05-06"),
        _dated("past-29", "2024-05-17"),
        _dated("past-7", "2024-06-08"),
        _dated("past-6", "2024-06-09"),
        _dated("today", "2024-06-15"),
        _dated("future-7", "2024-06-22"),
        _dated("future-8", "2024-06-23"),
        _dated("future-31", "2024-07-16"),
        _dated("future-32", "2024-07-17"),
        _dated("undated", None),
    ]

    def _apply(self, section, time_filter):
        return _names(apply_time_filter(self.games, TimeFilterState(section=section, time_filter=time_filter), TODAY))

    def test_all_keeps_everything(self):
        assert self._apply("out-now", "all") == _names(self.games)
        assert self._apply("coming-soon", "all") == _names(self.games)

    def test_out_now_today(self):
        assert self._apply("out-now", "today") == ["today"]

    def test_out_now_week(self):
        assert self._apply("out-now", "week") == ["past-6", "today"]

    def test_out_now_month(self):
        assert self._apply("out-now", "month") == ["past-29", "past-7", "past-6", "today"]

    def test_coming_soon_today(self):
        assert self._apply("coming-soon", "today") == ["today", "undated"]

    def test_coming_soon_week(self):
        assert self._apply("coming-soon", "week") == ["today", "future-7", "undated"]

    def test_coming_soon_month(self):
        assert self._apply("coming-soon", "month") == ["today", "future-7", "future-8", "future-31", "undated"]

    @pytest.mark.parametrize("time_filter", ["all", "today", "week", "month"])
    def test_coming_soon_keeps_undated(self, time_filter):
        assert "undated" in self._apply("coming-soon", time_filter)

    @pytest.mark.parametrize("time_filter", ["today", "week", "month"])
    def test_out_now_drops_undated(self, time_filter):
        assert "undated" not in self._apply("out-now", time_filter)

    def test_other_section_unfiltered(self):
        assert self._apply("trending", "week") == _names(self.games)

    def test_state_accepts_camel_case(self):
        state = TimeFilterState.model_validate({"section": "coming-soon", "timeFilter": "week"})
        assert state.time_filter == "week"
