# arena/engine/zones.py
import random
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from .dice import fresh_rng
from .errors import InvalidStanceError
from .models import BODY_ZONES, CombatStance, EquippedItem
from ..content.balance import BalanceConfig, DEFAULT_BALANCE
from ..content.stances import BOSS_STANCES, SLOT_TO_ZONE


def default_stance() -> CombatStance:
    return CombatStance(
        attack_zones=["torso"],
        block_allocation={"head": 1, "torso": 1, "waist": 1, "legs": 0},
    )


def _stance_parts(stance: Any):
    if isinstance(stance, CombatStance):
        return stance.attack_zones, stance.block_allocation
    if isinstance(stance, Mapping):
        return stance.get("attack_zones"), stance.get("block_allocation")
    return None


def validate_stance(stance: Any, config: BalanceConfig = DEFAULT_BALANCE) -> Optional[str]:
    """Return the reason a stance is invalid, or None when it can be used.

    Accepts a CombatStance or its plain-dict form so request payloads can be
    checked before they are parsed.
    """
    parts = _stance_parts(stance)
    if parts is None:
        return "Invalid stance object"
    attack, blocks = parts
    budget = config.max_block_points

    if not isinstance(attack, (list, tuple)) or not 1 <= len(attack) <= 2:
        return "Must select 1-2 attack zones"
    for zone in attack:
        if not isinstance(zone, str) or zone not in BODY_ZONES:
            return f"Invalid attack zone: {zone}"
    if len(set(attack)) != len(attack):
        return "Duplicate attack zones"

    if not isinstance(blocks, Mapping):
        return "Invalid block allocation"
    for key in blocks:
        if key not in BODY_ZONES:
            return f"Invalid block zone: {key}"
    total = 0
    for zone in BODY_ZONES:
        value = blocks.get(zone)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0 or value > budget:
            return f"Invalid block value for {zone}: {value}"
        total += value
    if total != budget:
        return f"Block points must sum to {budget}, got {total}"
    return None


def parse_stance(data: Any, config: BalanceConfig = DEFAULT_BALANCE) -> CombatStance:
    reason = validate_stance(data, config)
    if reason:
        raise InvalidStanceError(reason)
    attack, blocks = _stance_parts(data)
    return CombatStance(
        attack_zones=list(attack),
        block_allocation={zone: int(blocks[zone]) for zone in BODY_ZONES},
    )


def _weighted_pick(zones: Sequence[str], r: random.Random, config: BalanceConfig) -> str:
    weights = [max(0.0, float(config.zone_hit_weight.get(z, 0.0))) for z in zones]
    total = sum(weights)
    if total <= 0:
        return zones[0]
    roll = r.random() * total
    acc = 0.0
    for zone, weight in zip(zones, weights):
        acc += weight
        if roll < acc:
            return zone
    return zones[-1]


def resolve_hit_zone(stance: CombatStance, r: random.Random,
                     config: BalanceConfig = DEFAULT_BALANCE) -> str:
    """Pick the zone an attack lands on.

    The primary (first) zone wins outright on a focus roll; otherwise the
    hit is drawn across the chosen zones by hit weight.
    """
    zones = stance.attack_zones
    if len(zones) == 1:
        return zones[0]
    if r.random() < config.zone_focus_bonus:
        return zones[0]
    return _weighted_pick(zones, r, config)


def spread_hit_zones(hits: int, r: random.Random, config: BalanceConfig = DEFAULT_BALANCE) -> List[str]:
    """Distinct zones for a sweeping attack, drawn across the whole body."""
    pool = list(BODY_ZONES)
    picked: List[str] = []
    for _ in range(max(1, hits)):
        if not pool:
            pool = list(BODY_ZONES)
        zone = _weighted_pick(pool, r, config)
        pool.remove(zone)
        picked.append(zone)
    return picked


def calc_block_reduction(zone: str, defender_stance: CombatStance,
                         config: BalanceConfig = DEFAULT_BALANCE) -> float:
    points = int(defender_stance.block_allocation.get(zone, 0) or 0)
    return min(points, config.max_block_points) * config.block_reduction_per_point


def zone_damage_multiplier(zone: str, config: BalanceConfig = DEFAULT_BALANCE) -> float:
    return float(config.zone_damage_mult.get(zone, 1.0))


def empty_zone_armor() -> Dict[str, float]:
    return {zone: 0 for zone in BODY_ZONES}


def even_zone_armor(flat_armor: float) -> Dict[str, float]:
    share = flat_armor / len(BODY_ZONES)
    return {zone: share for zone in BODY_ZONES}


def _armor_stat(stats: Mapping[str, Any]) -> float:
    total = 0.0
    for key, value in (stats or {}).items():
        if str(key).lower() == "armor" and value:
            total += float(value)
    return total


def compute_zone_armor(items: Iterable[Any]) -> Dict[str, float]:
    zone_armor = empty_zone_armor()
    shared = 0.0
    for item in items:
        if isinstance(item, Mapping):
            item = EquippedItem.from_mapping(item)
        armor = _armor_stat(item.stats)
        if not armor:
            continue
        zone = SLOT_TO_ZONE.get(item.slot)
        if zone:
            zone_armor[zone] += armor
        else:
            shared += armor
    if shared:
        for zone, value in even_zone_armor(shared).items():
            zone_armor[zone] += value
    return zone_armor


def total_armor_from_zones(zone_armor: Mapping[str, float]) -> float:
    return sum(zone_armor.get(zone, 0) for zone in BODY_ZONES)


def generate_random_stance(r: Optional[random.Random] = None,
                           config: BalanceConfig = DEFAULT_BALANCE) -> CombatStance:
    r = r or fresh_rng()
    attack = r.sample(list(BODY_ZONES), r.randint(1, 2))
    blocks = {zone: 0 for zone in BODY_ZONES}
    for _ in range(config.max_block_points):
        blocks[r.choice(BODY_ZONES)] += 1
    return CombatStance(attack_zones=attack, block_allocation=blocks)


def generate_boss_stance(archetype: Optional[str] = None, r: Optional[random.Random] = None,
                         config: BalanceConfig = DEFAULT_BALANCE) -> CombatStance:
    preset = BOSS_STANCES.get(archetype or "")
    if preset is None:
        return generate_random_stance(r, config)
    return CombatStance(
        attack_zones=list(preset["attack_zones"]),
        block_allocation=dict(preset["block_allocation"]),
    )
