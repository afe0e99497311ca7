# arena/engine/origins.py
import math
from dataclasses import replace
from typing import Optional

from .models import BaseStats
from ..content.origins import ORIGINS


def apply_origin_bonuses(base_stats: BaseStats, origin_id: Optional[str]) -> BaseStats:
    """Return a new BaseStats with the origin's percentage modifiers applied.

    Each modified stat becomes ``floor(base * (1 + modifier))``. Unknown or
    missing origins leave the stats untouched.
    """
    origin = ORIGINS.get(origin_id or "")
    if not origin:
        return replace(base_stats)
    changes = {}
    for stat, mod in origin.get("stat_modifiers", {}).items():
        base = getattr(base_stats, stat)
        changes[stat] = int(math.floor(base * (1 + mod) + 1e-9))
    return replace(base_stats, **changes)


def _passive(origin_id: Optional[str]) -> dict:
    origin = ORIGINS.get(origin_id or "") or {}
    return origin.get("passive") or {}


def has_cheat_death(origin_id: Optional[str]) -> bool:
    return _passive(origin_id).get("id") == "cheating_death"


def get_cheat_death_chance(origin_id: Optional[str]) -> float:
    if not has_cheat_death(origin_id):
        return 0.0
    return float(_passive(origin_id).get("chance", 0.0))
