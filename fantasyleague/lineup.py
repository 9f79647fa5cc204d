"""Starting lineups: validation and persistence."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional

from .errors import InvalidInputError, NotFoundError

LINEUP_STARTER_SIZE = 11
LINEUP_SUBSTITUTE_SIZE = 5


class Position(str, enum.Enum):
    GOALKEEPER = "GK"
    DEFENDER = "DEF"
    MIDFIELDER = "MID"
    FORWARD = "FWD"

    def __str__(self) -> str:
        return self.value


@dataclass
class Lineup:
    user_id: str
    league_id: str
    goalkeeper_id: str
    defender_ids: List[str]
    midfielder_ids: List[str]
    forward_ids: List[str]
    substitute_ids: List[str]
    captain_id: str
    vice_captain_id: str
    updated_at: datetime


@dataclass
class SaveLineupInput:
    user_id: str = ""
    league_id: str = ""
    goalkeeper_id: str = ""
    defender_ids: List[str] = field(default_factory=list)
    midfielder_ids: List[str] = field(default_factory=list)
    forward_ids: List[str] = field(default_factory=list)
    substitute_ids: List[str] = field(default_factory=list)
    captain_id: str = ""
    vice_captain_id: str = ""


def _strip(value: Optional[str]) -> str:
    return (value or "").strip()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def normalize_ids(ids: Optional[Iterable[str]]) -> List[str]:
    """Strip every id; raise :class:`InvalidInputError` on a blank one."""
    cleaned = []
    for raw in ids or ():
        player_id = _strip(raw)
        if not player_id:
            raise InvalidInputError("player id cannot be empty")
        cleaned.append(player_id)
    return cleaned


def _validate_positions(ids: Iterable[str], expected: Position, players_by_id: Dict[str, Any]) -> None:
    for player_id in ids:
        found = players_by_id.get(player_id)
        if found is None:
            raise InvalidInputError(f"unknown player id {player_id}")
        if found.position != expected:
            raise InvalidInputError(f"player {player_id} must have position {expected.value}")


class LineupService:
    """Validates and stores lineups.

    ``league_repo.get_by_id`` and ``lineup_repo.get_by_user_and_league`` return
    ``None`` when nothing is found; ``player_repo.get_by_ids(league_id, ids)``
    returns the players of the league among ``ids``; ``lineup_repo.upsert``
    stores a :class:`Lineup`.
    """

    def __init__(
        self,
        league_repo: Any,
        player_repo: Any,
        lineup_repo: Any,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._league_repo = league_repo
        self._player_repo = player_repo
        self._lineup_repo = lineup_repo
        self._clock = clock

    def get_by_user_and_league(self, user_id: str, league_id: str) -> Optional[Lineup]:
        user_id = _strip(user_id)
        league_id = _strip(league_id)
        if not user_id or not league_id:
            raise InvalidInputError("user_id and league_id are required")
        return self._lineup_repo.get_by_user_and_league(user_id, league_id)

    def save(self, data: SaveLineupInput) -> Lineup:
        user_id = _strip(data.user_id)
        league_id = _strip(data.league_id)
        goalkeeper_id = _strip(data.goalkeeper_id)
        captain_id = _strip(data.captain_id)
        vice_captain_id = _strip(data.vice_captain_id)

        if not user_id:
            raise InvalidInputError("user_id is required")
        if not league_id:
            raise InvalidInputError("league_id is required")

        self._validate_league(league_id)

        defender_ids = normalize_ids(data.defender_ids)
        midfielder_ids = normalize_ids(data.midfielder_ids)
        forward_ids = normalize_ids(data.forward_ids)
        substitute_ids = normalize_ids(data.substitute_ids)

        if not 2 <= len(defender_ids) <= 5:
            raise InvalidInputError("defender count must be between 2 and 5")
        if len(midfielder_ids) > 5:
            raise InvalidInputError("midfielder count must not exceed 5")
        if len(forward_ids) > 3:
            raise InvalidInputError("forward count must not exceed 3")
        if len(substitute_ids) != LINEUP_SUBSTITUTE_SIZE:
            raise InvalidInputError("substitute bench must contain exactly 5 players")

        starters = [goalkeeper_id, *defender_ids, *midfielder_ids, *forward_ids]
        if len(starters) != LINEUP_STARTER_SIZE:
            raise InvalidInputError("starting lineup must contain 11 players")

        starter_set = set()
        for player_id in starters:
            if not player_id:
                raise InvalidInputError("starter player id cannot be empty")
            if player_id in starter_set:
                raise InvalidInputError(f"duplicate starter player id {player_id}")
            starter_set.add(player_id)

        if any(player_id in starter_set for player_id in substitute_ids):
            raise InvalidInputError("substitutes must be different from starters")

        all_ids = starters + substitute_ids
        seen = set()
        for player_id in all_ids:
            if player_id in seen:
                raise InvalidInputError(f"duplicate player id in squad {player_id}")
            seen.add(player_id)

        if len(all_ids) != LINEUP_STARTER_SIZE + LINEUP_SUBSTITUTE_SIZE:
            raise InvalidInputError("squad must contain 16 players")

        if captain_id not in starter_set:
            raise InvalidInputError("captain must be in starters")
        if vice_captain_id not in starter_set:
            raise InvalidInputError("vice captain must be in starters")
        if captain_id == vice_captain_id:
            raise InvalidInputError("captain and vice captain must be different")

        players = list(self._player_repo.get_by_ids(league_id, all_ids))
        if len(players) != len(all_ids):
            raise InvalidInputError("some players are not available in league")

        players_by_id = {p.id: p for p in players}
        goalkeeper = players_by_id.get(goalkeeper_id)
        if goalkeeper is None or goalkeeper.position != Position.GOALKEEPER:
            raise InvalidInputError("goalkeeper slot must contain a GK")

        _validate_positions(defender_ids, Position.DEFENDER, players_by_id)
        _validate_positions(midfielder_ids, Position.MIDFIELDER, players_by_id)
        _validate_positions(forward_ids, Position.FORWARD, players_by_id)

        item = Lineup(
            user_id=user_id,
            league_id=league_id,
            goalkeeper_id=goalkeeper_id,
            defender_ids=defender_ids,
            midfielder_ids=midfielder_ids,
            forward_ids=forward_ids,
            substitute_ids=substitute_ids,
            captain_id=captain_id,
            vice_captain_id=vice_captain_id,
            updated_at=_as_utc(self._clock()),
        )
        self._lineup_repo.upsert(item)
        return item

    def _validate_league(self, league_id: str) -> None:
        if self._league_repo.get_by_id(league_id) is None:
            raise NotFoundError(f"league={league_id}")