from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from urllib.parse import unquote_plus

import pytest

from fantasyleague.lineup import Lineup, Position
from fantasyleague.presenters import (
    derived_form,
    derived_player_metrics,
    derived_projected_points,
    fixture_to_dto,
    fnv32a,
    is_injured,
    league_initials,
    league_logo_url,
    league_to_public_dto,
    lineup_to_dto,
    player_to_public_dto,
    round1,
    squad_to_dto,
    team_to_dto,
)

KICKOFF = datetime(2026, 2, 14, 19, 0, 0, tzinfo=timezone.utc)


def _player(team_id="idn-persija", price=55):
    return SimpleNamespace(
        id="idn-mid-01",
        league_id="idn-liga-1-2025",
        name="Some Player",
        team_id=team_id,
        position=Position.MIDFIELDER,
        price=price,
    )


def test_fnv32a_offset_basis_for_empty_string():
    assert fnv32a("") == 2166136261


def test_fnv32a_known_vector():
    assert fnv32a("a") == 0xE40C292C


def test_fnv32a_fits_in_32_bits():
    for value in ["idn-gk-01", "idn-fwd-03-proj", "ä-unicode", "x" * 100]:
        assert 0 <= fnv32a(value) < 2**32


def test_round1_half_up():
    assert round1(1.25) == 1.3
    assert round1(3.0) == 3.0


@pytest.mark.parametrize("player_id", ["idn-gk-01", "idn-def-02", "idn-mid-03", "idn-fwd-01"])
def test_derived_metrics_ranges_and_consistency(player_id):
    form, projected = derived_player_metrics(player_id)
    assert 5.0 <= form <= 9.4
    assert 3.0 <= projected <= 10.9
    assert form == derived_form(player_id)
    assert projected == derived_projected_points(player_id)
    assert derived_player_metrics(player_id) == (form, projected)


def test_is_injured_is_rare_but_occurs():
    ids = [f"player-{n}" for n in range(400)]
    injured = [pid for pid in ids if is_injured(pid)]
    assert 0 < len(injured) < len(ids) // 4
    assert all(is_injured(pid) for pid in injured)


def test_league_initials():
    assert league_initials("") == "FL"
    assert league_initials("   ") == "FL"
    assert league_initials("Premier League") == "PL"
    assert league_initials("ab") == "ab".upper()
    assert len(league_initials("Liga")) == 2


def test_league_logo_url_round_trip():
    url = league_logo_url("Premier League", "ENG")
    assert url.startswith("data:image/svg+xml,")
    encoded = url[len("data:image/svg+xml,"):]
    assert " " not in encoded
    svg = unquote_plus(encoded)
    assert svg.startswith("<svg xmlns='http://www.w3.org/2000/svg'")
    assert ">" + league_initials("Premier League") + "<" in svg
    assert ">ENG<" in svg


def test_league_to_public_dto():
    league = SimpleNamespace(id="idn-liga-1-2025", name="Liga 1", country_code="ID")
    dto = league_to_public_dto(league)
    assert dto["id"] == "idn-liga-1-2025"
    assert dto["countryCode"] == "ID"
    assert dto["logoUrl"] == league_logo_url("Liga 1", "ID")


def test_team_to_dto():
    team = SimpleNamespace(id="idn-persija", league_id="idn-liga-1-2025", name="Persija Jakarta", short="PSJ")
    assert team_to_dto(team) == {
        "id": "idn-persija",
        "leagueId": "idn-liga-1-2025",
        "name": "Persija Jakarta",
        "short": "PSJ",
    }


def test_player_to_public_dto_uses_team_name():
    dto = player_to_public_dto(_player(), "Persija Jakarta")
    assert dto["club"] == "Persija Jakarta"
    assert dto["position"] == "MID"
    assert dto["price"] * 10 == pytest.approx(55)
    assert (dto["form"], dto["projectedPoints"]) == derived_player_metrics("idn-mid-01")
    assert dto["isInjured"] == is_injured("idn-mid-01")


@pytest.mark.parametrize("team_name", ["", "   ", None])
def test_player_to_public_dto_falls_back_to_team_id(team_name):
    assert player_to_public_dto(_player(), team_name)["club"] == "idn-persija"


def test_fixture_to_dto_formats_kickoff():
    fixture = SimpleNamespace(
        id="fx-001",
        league_id="idn-liga-1-2025",
        gameweek=1,
        home_team="Persija Jakarta",
        away_team="Persib Bandung",
        kickoff_at=KICKOFF,
        venue="Jakarta International Stadium",
    )
    dto = fixture_to_dto(fixture)
    assert dto["kickoffAt"] == "2026-02-14T19:00:00Z"
    assert dto["homeTeam"] == "Persija Jakarta"
    assert dto["gameweek"] == 1

    shifted = SimpleNamespace(**{**vars(fixture), "kickoff_at": KICKOFF.astimezone(timezone(timedelta(hours=7)))})
    assert fixture_to_dto(shifted)["kickoffAt"] == dto["kickoffAt"]


def test_lineup_to_dto_copies_lists():
    item = Lineup(
        user_id="user-1",
        league_id="idn-liga-1-2025",
        goalkeeper_id="idn-gk-01",
        defender_ids=["idn-def-01", "idn-def-02"],
        midfielder_ids=["idn-mid-01"],
        forward_ids=["idn-fwd-01"],
        substitute_ids=["idn-gk-02"],
        captain_id="idn-mid-01",
        vice_captain_id="idn-fwd-01",
        updated_at=KICKOFF,
    )
    dto = lineup_to_dto(item)
    assert dto["defenderIds"] == item.defender_ids
    assert dto["defenderIds"] is not item.defender_ids
    assert dto["captainId"] == "idn-mid-01"
    assert dto["updatedAt"] == fixture_to_dto(
        SimpleNamespace(id="", league_id="", gameweek=0, home_team="", away_team="", kickoff_at=KICKOFF, venue="")
    )["kickoffAt"]


def test_squad_to_dto_totals_prices():
    picks = [
        SimpleNamespace(player_id="idn-gk-02", team_id="idn-persib", position=Position.GOALKEEPER, price=45),
        SimpleNamespace(player_id="idn-def-01", team_id="idn-persija", position=Position.DEFENDER, price=60),
    ]
    squad = SimpleNamespace(
        id="squad-001",
        user_id="user-1",
        league_id="idn-liga-1-2025",
        name="Garuda FC",
        budget_cap=1000,
        picks=picks,
        created_at=KICKOFF,
        updated_at=KICKOFF,
    )
    dto = squad_to_dto(squad)
    assert dto["total_cost"] == 45 + 60
    assert dto["budget_cap"] == 1000
    assert [p["player_id"] for p in dto["picks"]] == ["idn-gk-02", "idn-def-01"]
    assert dto["picks"][0]["position"] == "GK"
    assert dto["created_at_utc"] == dto["updated_at_utc"]