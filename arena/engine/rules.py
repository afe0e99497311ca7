# arena/engine/rules.py
import math
from typing import Union

from ..content.balance import BalanceConfig, DEFAULT_BALANCE

Number = Union[int, float]


def clamp(x: Number, lo: Number, hi: Number) -> Number:
    return max(lo, min(hi, x))


def max_hp_for(vitality: int, config: BalanceConfig = DEFAULT_BALANCE) -> int:
    return max(config.min_max_hp, vitality * config.hp_per_vit)


def crit_chance(agility: int, luck: int, bonus: float = 0, config: BalanceConfig = DEFAULT_BALANCE) -> float:
    return min(config.max_crit_chance, config.base_crit_chance + agility / 10 + luck / 15 + bonus)


def crit_multiplier(strength: int, config: BalanceConfig = DEFAULT_BALANCE) -> float:
    return min(config.max_crit_damage, config.base_crit_damage + strength / 500)


def dodge_chance(agility: int, config: BalanceConfig = DEFAULT_BALANCE) -> float:
    return min(config.max_dodge, config.base_dodge + agility / 8)


def armor_reduction(armor: float, config: BalanceConfig = DEFAULT_BALANCE) -> float:
    if armor <= 0:
        return 0.0
    return min(config.armor_reduction_cap, armor / (armor + config.armor_denominator))


def magic_resist(wisdom: int, config: BalanceConfig = DEFAULT_BALANCE) -> float:
    if wisdom <= 0:
        return 0.0
    return min(config.magic_resist_cap, wisdom / (wisdom + config.magic_resist_denominator))


def status_resist_chance(endurance: int, wisdom: int, bonus: float = 0,
                         config: BalanceConfig = DEFAULT_BALANCE) -> float:
    return min(config.status_resist_cap, endurance / 10 + wisdom / 15 + bonus)


def physical_base(strength: float, multiplier: float, endurance: float,
                  config: BalanceConfig = DEFAULT_BALANCE) -> float:
    return max(1.0, strength * multiplier - endurance * config.end_defense_factor)


def magic_base(intelligence: float, multiplier: float, wisdom: float,
               config: BalanceConfig = DEFAULT_BALANCE) -> float:
    return max(1.0, intelligence * multiplier - wisdom * config.wis_defense_factor)


def finalize_damage(raw: float) -> int:
    # every landed hit deals at least 1
    return max(1, int(math.floor(raw)))
