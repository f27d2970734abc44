"""Load-time normalization of game records written by older front-ends.

Run once when records are loaded, so everything downstream sees a canonical
Game and never re-checks for missing fields:

- a single ``hostId`` becomes ``hostIds``
- a missing ``manualAdjustments`` log becomes empty
- a missing ``countInRoyalty`` stays ``None``; the standings fall back to
  the game type (see ``counts_toward_standings``)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from trivianight.models.game import Game

logger = logging.getLogger(__name__)


def _first_present(raw: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if raw.get(key) is not None:
            return raw[key]
    return None


def normalize_game(raw: dict[str, Any]) -> Game:
    """Build a canonical Game from a possibly legacy-shaped record."""
    data = dict(raw)

    host_ids = _first_present(data, "hostIds", "host_ids")
    if host_ids is None:
        legacy_host = _first_present(data, "hostId", "host_id")
        host_ids = [legacy_host] if legacy_host else []
        logger.debug("legacy_host_migrated game=%s hosts=%s", data.get("id"), host_ids)
    data.pop("hostId", None)
    data.pop("host_id", None)
    data.pop("host_ids", None)
    data["hostIds"] = host_ids

    for key, snake in (
        ("manualAdjustments", "manual_adjustments"),
        ("results", "results"),
        ("participatingTeamIds", "participating_team_ids"),
    ):
        if _first_present(data, key, snake) is None:
            data.pop(snake, None)
            data[key] = []

    if _first_present(data, "categoryConfigs", "category_configs") is None:
        data.pop("category_configs", None)
        data["categoryConfigs"] = {}

    return Game.model_validate(data)


def normalize_games(raws: Iterable[dict[str, Any]]) -> list[Game]:
    return [normalize_game(raw) for raw in raws]
