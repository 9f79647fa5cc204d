"""Read-only services for leagues, teams, fixtures and players.

Repositories are duck-typed: ``league_repo`` provides ``list()`` and
``get_by_id(league_id)`` (returning ``None`` when absent); team, fixture and
player repositories provide ``list_by_league(league_id)``.
"""

from __future__ import annotations

from typing import Any, List

from .errors import InvalidInputError, NotFoundError


def _require_league_id(league_id: str) -> str:
    league_id = (league_id or "").strip()
    if not league_id:
        raise InvalidInputError("league id is required")
    return league_id


def _ensure_league_exists(league_repo: Any, league_id: str) -> None:
    if league_repo.get_by_id(league_id) is None:
        raise NotFoundError(f"league={league_id}")


class LeagueService:
    def __init__(self, league_repo: Any, team_repo: Any) -> None:
        self._league_repo = league_repo
        self._team_repo = team_repo

    def list_leagues(self) -> List[Any]:
        return list(self._league_repo.list())

    def list_teams_by_league(self, league_id: str) -> List[Any]:
        league_id = _require_league_id(league_id)
        _ensure_league_exists(self._league_repo, league_id)
        return list(self._team_repo.list_by_league(league_id))


class FixtureService:
    def __init__(self, league_repo: Any, fixture_repo: Any) -> None:
        self._league_repo = league_repo
        self._fixture_repo = fixture_repo

    def list_by_league(self, league_id: str) -> List[Any]:
        league_id = _require_league_id(league_id)
        _ensure_league_exists(self._league_repo, league_id)
        return list(self._fixture_repo.list_by_league(league_id))


class PlayerService:
    def __init__(self, league_repo: Any, player_repo: Any) -> None:
        self._league_repo = league_repo
        self._player_repo = player_repo

    def list_players_by_league(self, league_id: str) -> List[Any]:
        league_id = _require_league_id(league_id)
        _ensure_league_exists(self._league_repo, league_id)
        return list(self._player_repo.list_by_league(league_id))