"""
Tests for the record fetcher and the standings authority.
"""

import asyncio

import pytest
from unittest.mock import AsyncMock

from playoff_watch.providers.authority import (
    StandingsAuthority,
    parse_standings,
    status_from_flags,
    sync_aliases,
)
from playoff_watch.providers.base import DecodeError, TransientFetchError
from playoff_watch.providers.fetcher import RecordFetcher
from playoff_watch.standings.models import PlayoffStatus

from conftest import FakeProvider, make_record, standings_payload


class TestStatusFromFlags:
    """Tests for the clinch code / seed mapping."""

    @pytest.mark.parametrize("clinch,seed,expected", [
        ("e", None, PlayoffStatus.ELIMINATED),
        ("E", 3, PlayoffStatus.ELIMINATED),
        ("x", None, PlayoffStatus.CLINCHED),
        ("y", 9, PlayoffStatus.CLINCHED),
        ("z", 1, PlayoffStatus.CLINCHED),
        (None, 7, PlayoffStatus.ALIVE),
        ("", 1, PlayoffStatus.ALIVE),
        (None, 8, PlayoffStatus.BUBBLE),
        ("*", 12, PlayoffStatus.BUBBLE),
        (None, None, None),
        ("-", None, None),
    ])
    def test_mapping(self, clinch, seed, expected):
        """Test each rule in order."""
        assert status_from_flags(clinch, seed) == expected


class TestParseStandings:
    """Tests for parse_standings."""

    def test_builds_map(self):
        """Test entries map to statuses and unflagged teams are left out."""
        payload = standings_payload([
            {"abbreviation": "KC", "clincher": "z", "seed": 1},
            {"abbreviation": "NYJ", "clincher": "e", "seed": 14},
            {"abbreviation": "MIA", "seed": 8},
            {"abbreviation": "DEN", "seed": 6},
            {"abbreviation": "TEN"},
        ])
        statuses = parse_standings(payload)
        assert statuses["KC"] == PlayoffStatus.CLINCHED
        assert statuses["NYJ"] == PlayoffStatus.ELIMINATED
        assert statuses["MIA"] == PlayoffStatus.BUBBLE
        assert statuses["DEN"] == PlayoffStatus.ALIVE
        assert "TEN" not in statuses

    def test_alias_sync(self):
        """Test ESPN's WSH lands on WAS and both spellings agree."""
        payload = standings_payload([{"abbreviation": "WSH", "clincher": "x", "seed": 2}])
        statuses = parse_standings(payload)
        assert statuses["WAS"] == PlayoffStatus.CLINCHED
        assert statuses["WSH"] == PlayoffStatus.CLINCHED

    def test_multiple_groups(self):
        """Test entries are read from every conference group."""
        payload = {
            "children": [
                {"standings": {"entries": [
                    {"team": {"abbreviation": "BUF"}, "stats": [{"name": "playoffSeed", "value": 2}]}
                ]}},
                {"standings": {"entries": [
                    {"team": {"abbreviation": "DET"}, "stats": [{"type": "playoffSeed", "value": 1}]}
                ]}},
            ]
        }
        statuses = parse_standings(payload)
        assert statuses["BUF"] == PlayoffStatus.ALIVE
        assert statuses["DET"] == PlayoffStatus.ALIVE

    def test_missing_groups(self):
        """Test a payload without groups is a decode error."""
        with pytest.raises(DecodeError):
            parse_standings({"standings": []})

    def test_entry_without_abbreviation(self):
        """Test one bad entry spoils the whole map."""
        payload = standings_payload([{"abbreviation": "KC", "seed": 1}])
        payload["children"][0]["standings"]["entries"].append({"team": {}, "stats": []})
        with pytest.raises(DecodeError, match="abbreviation"):
            parse_standings(payload)

    def test_non_numeric_seed(self):
        """Test a garbage seed is a decode error."""
        payload = standings_payload([{"abbreviation": "KC"}])
        payload["children"][0]["standings"]["entries"][0]["stats"].append(
            {"name": "playoffSeed", "value": "first"}
        )
        with pytest.raises(DecodeError, match="seed"):
            parse_standings(payload)

    def test_stats_not_a_list(self):
        """Test a scalar stats field is a decode error."""
        payload = standings_payload([{"abbreviation": "KC"}])
        payload["children"][0]["standings"]["entries"][0]["stats"] = 5
        with pytest.raises(DecodeError, match="Malformed stats"):
            parse_standings(payload)

    def test_numeric_clinch_code(self):
        """Test a clinch code that isn't text is a decode error."""
        payload = standings_payload([{"abbreviation": "KC", "clincher": 1}])
        with pytest.raises(DecodeError, match="clinch code"):
            parse_standings(payload)

    def test_non_text_abbreviation(self):
        """Test a numeric abbreviation is a decode error."""
        payload = standings_payload([{"abbreviation": 12, "seed": 1}])
        with pytest.raises(DecodeError, match="abbreviation"):
            parse_standings(payload)

    def test_infinite_seed(self):
        """Test a seed too large for an int is a decode error."""
        payload = standings_payload([{"abbreviation": "KC"}])
        payload["children"][0]["standings"]["entries"][0]["stats"].append(
            {"name": "playoffSeed", "value": float("inf")}
        )
        with pytest.raises(DecodeError, match="seed"):
            parse_standings(payload)

    def test_status_from_flags_rejects_bad_types(self):
        """Test non-text clinch codes and non-integer seeds are decode errors."""
        with pytest.raises(DecodeError):
            status_from_flags(5, None)
        with pytest.raises(DecodeError):
            status_from_flags(None, "3")

    def test_sync_aliases(self):
        """Test every alias gets its canonical team's status."""
        synced = sync_aliases({"LV": PlayoffStatus.BUBBLE, "KC": PlayoffStatus.ALIVE})
        assert synced["LVR"] == synced["OAK"] == synced["LV"] == PlayoffStatus.BUBBLE
        assert synced["KC"] == PlayoffStatus.ALIVE


class TestStandingsAuthority:
    """Tests for StandingsAuthority."""

    @pytest.mark.asyncio
    async def test_success(self):
        """Test statuses come back from a good payload."""
        provider = FakeProvider(standings=standings_payload([{"abbreviation": "KC", "clincher": "z"}]))
        statuses = await StandingsAuthority(provider).fetch_statuses(2025)
        assert statuses == {"KC": PlayoffStatus.CLINCHED}

    @pytest.mark.asyncio
    async def test_transport_failure_is_empty(self):
        """Test a failed request yields an empty map."""
        provider = FakeProvider(standings_error=TransientFetchError("down"))
        assert await StandingsAuthority(provider).fetch_statuses(2025) == {}

    @pytest.mark.asyncio
    async def test_decode_failure_is_empty(self):
        """Test a malformed payload yields an empty map, not a partial one."""
        payload = standings_payload([{"abbreviation": "KC", "clincher": "z"}])
        payload["children"].append("garbage")
        provider = FakeProvider(standings=payload)
        assert await StandingsAuthority(provider).fetch_statuses(2025) == {}

    @pytest.mark.asyncio
    async def test_wrongly_shaped_payloads_are_empty(self):
        """Test wrong types inside otherwise valid JSON yield an empty map."""
        non_list_stats = standings_payload([{"abbreviation": "KC", "clincher": "z"}])
        non_list_stats["children"][0]["standings"]["entries"].append(
            {"team": {"abbreviation": "BUF"}, "stats": 5}
        )
        numeric_clincher = standings_payload([
            {"abbreviation": "KC", "clincher": "z"},
            {"abbreviation": "BUF", "clincher": 3},
        ])
        for payload in (non_list_stats, numeric_clincher):
            provider = FakeProvider(standings=payload)
            assert await StandingsAuthority(provider).fetch_statuses(2025) == {}

    @pytest.mark.asyncio
    async def test_no_flags_is_empty(self):
        """Test a payload with no clinch or seed data yields an empty map."""
        provider = FakeProvider(standings=standings_payload([{"abbreviation": "KC"}]))
        assert await StandingsAuthority(provider).fetch_statuses(2025) == {}


class TestRecordFetcher:
    """Tests for RecordFetcher fan-out."""

    @pytest.mark.asyncio
    async def test_partial_failure(self):
        """Test one team's failure only drops that team."""
        provider = FakeProvider(
            records={"KC": make_record("KC", 10, 4), "BUF": make_record("BUF", 9, 5)},
            failing={"BUF"}
        )
        result = await RecordFetcher(provider).fetch_all({"KC": "12", "BUF": "2", "MIA": "15"}, 2025)
        assert set(result.records) == {"KC"}
        assert sorted(result.failed) == ["BUF", "MIA"]
        assert result.failure_count == 2

    @pytest.mark.asyncio
    async def test_all_requests_issued(self):
        """Test every roster entry gets its own request."""
        provider = FakeProvider(records={"KC": make_record("KC", 10, 4)})
        await RecordFetcher(provider).fetch_all({"KC": "12", "BUF": "2"}, 2025)
        assert sorted(provider.record_calls) == ["BUF", "KC"]

    @pytest.mark.asyncio
    async def test_passes_provider_id_and_season(self):
        """Test the provider receives the roster's ID and the season."""
        provider = AsyncMock()
        provider.fetch_team_record.return_value = make_record("KC", 1, 0)
        await RecordFetcher(provider).fetch_all({"KC": "12"}, 2023)
        provider.fetch_team_record.assert_awaited_once_with("KC", "12", 2023)

    @pytest.mark.asyncio
    async def test_concurrency_bound(self):
        """Test no more than max_concurrency requests run at once."""
        in_flight = 0
        peak = 0

        class SlowProvider(FakeProvider):
            async def fetch_team_record(self, team_code, provider_id, season):
                nonlocal in_flight, peak
                in_flight += 1
                peak = max(peak, in_flight)
                await asyncio.sleep(0.01)
                in_flight -= 1
                return make_record(team_code, 1, 0)

        roster = {f"T{i}": str(i) for i in range(12)}
        result = await RecordFetcher(SlowProvider(), max_concurrency=3).fetch_all(roster, 2025)
        assert len(result.records) == 12
        assert peak == 3

    def test_invalid_concurrency(self):
        """Test a zero concurrency limit is rejected."""
        with pytest.raises(ValueError):
            RecordFetcher(FakeProvider(), max_concurrency=0)
