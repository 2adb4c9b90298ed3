"""
Fallback playoff contention calculation from win/loss records alone.

Used only when the standings authority has nothing to say. This is an
approximation based on win totals and games remaining: no head-to-head,
division record, common games, or strength-of-schedule tiebreakers.
"""

from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

from ..core.season import REGULAR_SEASON_GAMES
from ..core.teams import Conference, conference_for
from .models import ContentionDetail, ContentionMap, PlayoffStatus, TeamRecord


PLAYOFF_SPOTS = 7
CLINCH_SEEDS = 2
CLINCH_MARGIN = 4
LATE_SEASON_GAMES = 2
LATE_SEASON_DEFICIT = 2


def rank_conference(records: Sequence[Tuple[str, TeamRecord]]) -> List[Tuple[str, TeamRecord]]:
    """
    Order a conference by wins, then winning percentage, best first.

    The sort is stable, so teams level on both keep their input order.
    """
    return sorted(records, key=lambda item: (-item[1].wins, -item[1].win_percentage))


def calculate_conference_details(
    records: Sequence[Tuple[str, TeamRecord]],
    season_games: int = REGULAR_SEASON_GAMES,
    playoff_spots: int = PLAYOFF_SPOTS
) -> Dict[str, ContentionDetail]:
    """
    Classify each team in one conference.

    Rules are checked in order and the first match wins:
    1. Can't reach the playoff line even winning out -> eliminated
    2. More than two wins off the line with two or fewer games left -> eliminated
    3. Outside the seeds and needs more wins than games left -> eliminated
    4. Inside the seeds -> clinched if a top-two seed at least four wins
       clear of the line, otherwise alive
    5. Everything else -> bubble

    Args:
        records: (team code, record) pairs for a single conference
        season_games: Regular season length
        playoff_spots: Seeds that qualify for the postseason

    Returns:
        Dict mapping team code -> ContentionDetail
    """
    ranked = rank_conference(records)

    # Wins held by the last playoff seed; 0 if the conference is short of teams
    if len(ranked) >= playoff_spots:
        playoff_line_wins = ranked[playoff_spots - 1][1].wins
    else:
        playoff_line_wins = 0

    details: Dict[str, ContentionDetail] = {}

    for index, (team_code, record) in enumerate(ranked):
        seed = index + 1
        remaining = season_games - record.games_played
        max_possible_wins = record.wins + remaining
        wins_needed = playoff_line_wins - record.wins

        if max_possible_wins < playoff_line_wins:
            status = PlayoffStatus.ELIMINATED
        elif (record.wins < playoff_line_wins - LATE_SEASON_DEFICIT
              and remaining <= LATE_SEASON_GAMES):
            status = PlayoffStatus.ELIMINATED
        elif seed > playoff_spots and wins_needed > remaining:
            status = PlayoffStatus.ELIMINATED
        elif seed <= playoff_spots:
            if seed <= CLINCH_SEEDS and record.wins >= playoff_line_wins + CLINCH_MARGIN:
                status = PlayoffStatus.CLINCHED
            else:
                status = PlayoffStatus.ALIVE
        else:
            status = PlayoffStatus.BUBBLE

        details[team_code] = ContentionDetail(
            team_code=team_code,
            seed=seed,
            games_remaining=remaining,
            max_possible_wins=max_possible_wins,
            wins_needed=wins_needed,
            status=status
        )

    return details


def calculate_conference_contention(
    records: Sequence[Tuple[str, TeamRecord]],
    season_games: int = REGULAR_SEASON_GAMES,
    playoff_spots: int = PLAYOFF_SPOTS
) -> ContentionMap:
    """Classify one conference, returning team code -> PlayoffStatus."""
    details = calculate_conference_details(records, season_games, playoff_spots)
    return {code: detail.status for code, detail in details.items()}


def group_by_conference(
    records: Iterable[Tuple[str, TeamRecord]]
) -> Dict[Conference, List[Tuple[str, TeamRecord]]]:
    """
    Split records into their conferences, keeping input order.

    Codes that aren't in the team table are dropped.
    """
    groups: Dict[Conference, List[Tuple[str, TeamRecord]]] = {
        conference: [] for conference in Conference
    }
    for team_code, record in records:
        conference = conference_for(team_code)
        if conference is not None:
            groups[conference].append((team_code, record))
    return groups


def calculate_contention(
    records: Mapping[str, TeamRecord],
    season_games: int = REGULAR_SEASON_GAMES
) -> ContentionMap:
    """
    Classify every team, each conference computed independently.

    Teams are fed to each conference in sorted code order so the result
    doesn't depend on how the caller happened to build the mapping.
    """
    statuses: ContentionMap = {}
    ordered = sorted(records.items())
    for members in group_by_conference(ordered).values():
        statuses.update(calculate_conference_contention(members, season_games))
    return statuses
