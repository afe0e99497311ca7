# arena/content/balance.py
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Mapping, Optional

from ..engine.errors import ConfigError

DEFAULTS = {
    "hp_per_vit": 10,
    "min_max_hp": 100,
    "max_turns": 15,
    "max_block_points": 3,
}

CAPS = {
    "crit_chance_max": 50,
    "crit_damage_max": 2.8,
    "dodge_max": 40,
    "armor_reduction_max": 0.75,
    "magic_resist_max": 0.70,
    "status_resist_max": 60,
}


@dataclass(frozen=True)
class BalanceConfig:
    # hit points
    hp_per_vit: int = DEFAULTS["hp_per_vit"]
    min_max_hp: int = DEFAULTS["min_max_hp"]

    # crit / dodge
    base_crit_chance: float = 5.0
    max_crit_chance: float = CAPS["crit_chance_max"]
    base_crit_damage: float = 1.5
    max_crit_damage: float = CAPS["crit_damage_max"]
    base_dodge: float = 3.0
    max_dodge: float = CAPS["dodge_max"]

    # mitigation
    armor_denominator: float = 100.0
    armor_reduction_cap: float = CAPS["armor_reduction_max"]
    magic_resist_denominator: float = 150.0
    magic_resist_cap: float = CAPS["magic_resist_max"]
    end_defense_factor: float = 0.5
    wis_defense_factor: float = 0.4
    variance_min: float = 0.95
    variance_max: float = 1.05

    # statuses
    status_resist_cap: float = CAPS["status_resist_max"]
    status_tick_pct: Dict[str, float] = field(default_factory=lambda: {
        "bleed": 0.05,
        "poison": 0.03,
        "burn": 0.04,
        "regen": 0.05,
    })
    weaken_damage_mult: float = 0.8
    slow_agility_mult: float = 0.5

    # action selection
    enemy_skill_use_chance: float = 0.6
    player_skill_use_chance: float = 0.5

    # body zones
    max_block_points: int = DEFAULTS["max_block_points"]
    block_reduction_per_point: float = 0.25
    zone_focus_bonus: float = 0.15
    zone_damage_mult: Dict[str, float] = field(default_factory=lambda: {
        "head": 1.3,
        "torso": 1.0,
        "waist": 0.9,
        "legs": 0.8,
    })
    zone_hit_weight: Dict[str, float] = field(default_factory=lambda: {
        "head": 20.0,
        "torso": 35.0,
        "waist": 25.0,
        "legs": 20.0,
    })

    # equipment
    weapon_affinity_bonus: float = 0.15

    # fight length
    max_turns: int = DEFAULTS["max_turns"]
    decide_by_hp_at_cap: bool = False

    def with_overrides(self, overrides: Optional[Mapping[str, Any]]) -> "BalanceConfig":
        """Return a copy with the given tunables replaced.

        Dict-valued tunables are merged key by key, so an override of
        ``{"zone_damage_mult": {"head": 1.5}}`` keeps the other zones.
        """
        if not overrides:
            return self
        known = {f.name for f in fields(self)}
        changes: Dict[str, Any] = {}
        for key, value in overrides.items():
            if key not in known:
                raise ConfigError(f"Unknown balance setting: {key}")
            current = getattr(self, key)
            if isinstance(current, dict):
                if not isinstance(value, Mapping):
                    raise ConfigError(f"Balance setting {key} expects a mapping")
                merged = dict(current)
                merged.update(value)
                changes[key] = merged
            else:
                changes[key] = value
        return replace(self, **changes)


DEFAULT_BALANCE = BalanceConfig()
