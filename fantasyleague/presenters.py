"""Conversion of domain objects into the JSON shapes served by the API."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple
from urllib.parse import quote_plus

_FNV32_OFFSET = 0x811C9DC5
_FNV32_PRIME = 0x01000193

_LOGO_TEMPLATE = (
    "<svg xmlns='http://www.w3.org/2000/svg' viewBox='0 0 320 180'>"
    "<rect width='320' height='180' fill='#0b5730'/>"
    "<rect x='8' y='8' width='304' height='164' rx='12' fill='#0f6e3d'/>"
    "<text x='160' y='92' text-anchor='middle' fill='white' "
    "font-family='Arial, sans-serif' font-size='44' font-weight='700'>{initials}</text>"
    "<text x='160' y='126' text-anchor='middle' fill='#e7f7eb' "
    "font-family='Arial, sans-serif' font-size='16'>{country}</text></svg>"
)


def _enum_text(value: Any) -> str:
    return str(getattr(value, "value", value))


def _rfc3339(moment: Optional[datetime]) -> str:
    """Format ``moment`` in UTC as ``YYYY-MM-DDTHH:MM:SSZ``; naive values count as UTC."""
    if moment is None:
        moment = datetime(1, 1, 1, tzinfo=timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    else:
        moment = moment.astimezone(timezone.utc)
    return (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}Z"
    )


def fnv32a(value: str) -> int:
    """32-bit FNV-1a hash of the UTF-8 bytes of ``value``."""
    result = _FNV32_OFFSET
    for byte in value.encode("utf-8"):
        result ^= byte
        result = (result * _FNV32_PRIME) & 0xFFFFFFFF
    return result


def round1(value: float) -> float:
    """Round half up to one decimal place, truncating toward zero after the shift."""
    return float(math.trunc(value * 10 + 0.5)) / 10.0


def derived_form(player_id: str) -> float:
    return round1(5.0 + (fnv32a(player_id) % 45) / 10.0)


def derived_projected_points(player_id: str) -> float:
    return round1(3.0 + (fnv32a(player_id + "-proj") % 80) / 10.0)


def derived_player_metrics(player_id: str) -> Tuple[float, float]:
    """Return ``(form, projected_points)`` for a player."""
    return derived_form(player_id), derived_projected_points(player_id)


def is_injured(player_id: str) -> bool:
    return fnv32a(player_id + "-inj") % 20 == 0


def league_initials(name: str) -> str:
    parts = (name or "").split()
    if not parts:
        return "FL"
    if len(parts) == 1:
        return parts[0].upper()[:2]
    return (parts[0][:1] + parts[1][:1]).upper()


def league_logo_url(name: str, country_code: str) -> str:
    """A data URL holding a generated SVG badge for the league."""
    svg = _LOGO_TEMPLATE.format(initials=league_initials(name), country=country_code)
    return "data:image/svg+xml," + quote_plus(svg, safe="")


def league_to_public_dto(league: Any) -> Dict[str, Any]:
    return {
        "id": league.id,
        "name": league.name,
        "countryCode": league.country_code,
        "logoUrl": league_logo_url(league.name, league.country_code),
    }


def team_to_dto(team: Any) -> Dict[str, Any]:
    return {
        "id": team.id,
        "leagueId": team.league_id,
        "name": team.name,
        "short": team.short,
    }


def player_to_public_dto(player: Any, team_name: Optional[str]) -> Dict[str, Any]:
    club = team_name if (team_name or "").strip() else player.team_id
    form, projected = derived_player_metrics(player.id)
    return {
        "id": player.id,
        "leagueId": player.league_id,
        "name": player.name,
        "club": club,
        "position": _enum_text(player.position),
        "price": float(player.price) / 10.0,
        "form": form,
        "projectedPoints": projected,
        "isInjured": is_injured(player.id),
    }


def fixture_to_dto(fixture: Any) -> Dict[str, Any]:
    return {
        "id": fixture.id,
        "leagueId": fixture.league_id,
        "gameweek": fixture.gameweek,
        "homeTeam": fixture.home_team,
        "awayTeam": fixture.away_team,
        "kickoffAt": _rfc3339(fixture.kickoff_at),
        "venue": fixture.venue,
    }


def lineup_to_dto(item: Any) -> Dict[str, Any]:
    return {
        "leagueId": item.league_id,
        "goalkeeperId": item.goalkeeper_id,
        "defenderIds": list(item.defender_ids),
        "midfielderIds": list(item.midfielder_ids),
        "forwardIds": list(item.forward_ids),
        "substituteIds": list(item.substitute_ids),
        "captainId": item.captain_id,
        "viceCaptainId": item.vice_captain_id,
        "updatedAt": _rfc3339(item.updated_at),
    }


def squad_to_dto(squad: Any) -> Dict[str, Any]:
    picks = [
        {
            "player_id": pick.player_id,
            "team_id": pick.team_id,
            "position": _enum_text(pick.position),
            "price": pick.price,
        }
        for pick in squad.picks
    ]
    return {
        "id": squad.id,
        "user_id": squad.user_id,
        "league_id": squad.league_id,
        "name": squad.name,
        "budget_cap": squad.budget_cap,
        "total_cost": sum(pick["price"] for pick in picks),
        "picks": picks,
        "created_at_utc": _rfc3339(squad.created_at),
        "updated_at_utc": _rfc3339(squad.updated_at),
    }