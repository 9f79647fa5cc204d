# fantasyleague

Building blocks for a fantasy football league HTTP API. The package has
services that list leagues, teams, fixtures and players, check and store
starting lineups, and build a manager dashboard. It also has a JSON response
envelope that maps service errors to HTTP statuses, and WSGI middleware for
bearer-token authentication, request logging and CORS.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

### `fantasyleague.errors`

Every service error derives from `ServiceError`. Its message is the error's
base text, followed by `": <detail>"` when a detail is given. For example,
`InvalidInputError("league id is required")` reads
`invalid input: league id is required`.

| Error                        | Base message             | HTTP status |
|------------------------------|--------------------------|-------------|
| `InvalidInputError`          | `invalid input`          | 400         |
| `NotFoundError`              | `resource not found`     | 404         |
| `UnauthorizedError`          | `unauthorized`           | 401         |
| `DependencyUnavailableError` | `dependency unavailable` | 503         |

### `fantasyleague.catalog`

- `LeagueService(league_repo, team_repo)` has `list_leagues()` and
  `list_teams_by_league(league_id)`.
- `FixtureService(league_repo, fixture_repo)` has `list_by_league(league_id)`.
- `PlayerService(league_repo, player_repo)` has
  `list_players_by_league(league_id)`.

A league id is stripped before use. A blank id raises `InvalidInputError`. An
unknown league raises `NotFoundError`.

### `fantasyleague.lineup`

`LineupService(league_repo, player_repo, lineup_repo, clock=...)` has two
methods:

- `get_by_user_and_league(user_id, league_id)` returns the stored `Lineup`,
  or `None` if there is none.
- `save(SaveLineupInput(...))` checks the lineup, stores it with
  `lineup_repo.upsert` and returns the `Lineup`. `updated_at` is the clock's
  time in UTC.

A lineup is accepted only if all of these hold:

- one goalkeeper, 2 to 5 defenders, at most 5 midfielders and at most 3
  forwards, making exactly 11 starters;
- exactly 5 substitutes, none of whom is also a starter;
- no player id is blank, and no player id appears twice;
- the captain and the vice captain are both starters, and they are different
  players;
- every player exists in the league, and each one's `position` matches its
  slot.

The slots use the `Position` values `GK`, `DEF`, `MID` and `FWD`. A broken rule
raises `InvalidInputError`. An unknown league raises `NotFoundError`.

`normalize_ids(ids)` strips each id and raises `InvalidInputError` on a blank
one.

### `fantasyleague.dashboard`

`DashboardService(league_repo, player_repo, fixture_repo, lineup_repo).get(user_id)`
returns a `Dashboard`. Its fields are set as follows:

- The selected league is the first league marked `is_default`. If no league is
  marked, it is the first league.
- `gameweek` is the lowest gameweek among that league's fixtures, or `1` if the
  league has no fixtures.
- `budget` is `100.0`.
- `team_value` is the sum of the player prices in the user's stored lineup,
  divided by 10. It is `98.7` when there is no lineup or no prices can be
  read.
- `total_points` and `rank` are `0`.

If there are no leagues at all, `get` raises `NotFoundError`.

### `fantasyleague.squad_inputs`

This module has the input records `UpsertSquadInput`, `PickSquadInput` and
`AddPlayerToSquadInput`, and the constant `DEFAULT_SQUAD_NAME` (`"My Squad"`).
`clean_player_ids(ids)` strips each id and keeps the original order. It raises
`InvalidInputError` on a blank id or a repeated id.

### `fantasyleague.presenters`

These functions turn domain objects into the JSON dictionaries that the API
serves: `league_to_public_dto`, `team_to_dto`, `player_to_public_dto`,
`fixture_to_dto`, `lineup_to_dto` and `squad_to_dto`. Timestamps come out as
`YYYY-MM-DDTHH:MM:SSZ` in UTC. Prices are stored in tenths; the player view
divides them by 10.

The module also has these helpers:

- `derived_form`, `derived_projected_points`, `derived_player_metrics` and
  `is_injured` compute stand-in player statistics. Each one is derived from a
  32-bit FNV-1a hash of the player id, so the same id always gives the same
  result. The hash itself is available as `fnv32a`.
- `round1` rounds to one decimal place.
- `league_initials` returns the initials of a league name.
- `league_logo_url` returns a `data:` URL holding a generated SVG badge.

### `fantasyleague.response`

Each of these functions returns a `werkzeug.wrappers.Response`:

- `write_json(status, payload)` writes `payload` as JSON. Dataclasses are
  converted to dictionaries.
- `write_success(status, data)` writes `{"apiVersion": "2.0", "data": ...}`.
  The `data` key is left out when `data` is `None`.
- `write_error(error)` writes an `error` object with `code`, `message`,
  `status` and `errors`.
- `write_internal_error()` writes a fixed 500 response.

`map_error(error)` returns the `MappedError` (HTTP status, reason and status
name) for an exception. Any error that is not a known service error maps to
500 `INTERNAL`.

### `fantasyleague.middleware`

- `Principal(user_id, email="")` is the authenticated caller.
  `with_principal(environ, principal)` returns a copy of a WSGI environ that
  carries a principal, and `principal_from_environ(environ)` reads it back.
- `require_auth(verifier, view)` wraps a view that takes a werkzeug `Request`.
  It expects an `Authorization: Bearer <token>` header and passes the token to
  `verifier.verify_access_token(token)`. The view then receives a request
  whose environ carries the principal. If the header is missing or malformed,
  or the verifier raises, the wrapper returns the error envelope instead of
  calling the view.
- `request_logging(logger, app)` wraps a WSGI app and logs each request's
  method, path, remote address and duration.
- `cors(allowed_origins, app)` adds CORS headers for the listed origins. `"*"`
  allows any origin. `OPTIONS` requests are answered with 204.

```python
from werkzeug.wrappers import Request

from fantasyleague.middleware import Principal, cors, principal_from_environ, require_auth
from fantasyleague.response import write_success


class Verifier:
    def verify_access_token(self, token):
        return Principal(user_id="user-1", email="user@example.com")


def me(request):
    principal = principal_from_environ(request.environ)
    return write_success(200, {"user_id": principal.user_id})


protected = require_auth(Verifier(), me)


@Request.application
def app(request):
    return protected(request)


app = cors(["*"], app)
```

### `fantasyleague.idgen`

`RandomIdGenerator().new_id()` returns 16 random bytes as a 32-character
lower-case hex string.

## What this package does not do

- It has no route table, request handler class or server entry point. You wire
  the services, presenters, responses and middleware into a WSGI application
  yourself.
- It stores nothing. You supply every repository as an object with the methods
  the services call: `list`, `get_by_id`, `list_by_league`, `get_by_ids`,
  `get_by_user_and_league` and `upsert`. Lookups return `None` when nothing is
  found.
- It has input records and id cleaning for squads, but no service that
  creates, picks or adds to a squad, and no squad rules such as budget or
  per-team limits.
- It serves no API documentation page.