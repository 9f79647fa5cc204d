"""Payloads accepted by the squad operations and player id cleaning."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .errors import InvalidInputError

DEFAULT_SQUAD_NAME = "My Squad"


@dataclass
class UpsertSquadInput:
    """Create or replace a squad."""

    user_id: str = ""
    league_id: str = ""
    name: str = ""
    player_ids: List[str] = field(default_factory=list)


@dataclass
class PickSquadInput:
    """Pick a full squad.

    ``squad_name`` is optional: when empty, an existing squad's name is
    reused, or the default name is used for a new squad.
    """

    user_id: str = ""
    league_id: str = ""
    squad_name: str = ""
    player_ids: List[str] = field(default_factory=list)


@dataclass
class AddPlayerToSquadInput:
    """Add a single player to a squad, creating the squad if needed."""

    user_id: str = ""
    league_id: str = ""
    squad_name: str = ""
    player_id: str = ""


def clean_player_ids(player_ids: Optional[Iterable[str]]) -> List[str]:
    """Strip every id, keeping order; reject blank and duplicate ids."""
    cleaned: List[str] = []
    seen = set()
    for raw in player_ids or ():
        player_id = (raw or "").strip()
        if not player_id:
            raise InvalidInputError("player id cannot be empty")
        if player_id in seen:
            raise InvalidInputError(f"duplicate player id {player_id}")
        seen.add(player_id)
        cleaned.append(player_id)
    return cleaned