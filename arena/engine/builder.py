# arena/engine/builder.py
import logging
from dataclasses import replace
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from . import rules
from .errors import InvalidStanceError, UnknownAbilityError, UnknownClassError
from .models import BODY_ZONES, Ability, BaseStats, CharacterClass, CombatStance, CombatantState
from .origins import apply_origin_bonuses
from .zones import default_stance, even_zone_armor, parse_stance, validate_stance
from ..content.balance import BalanceConfig, DEFAULT_BALANCE
from ..content.boss_abilities import BOSS_ABILITIES

logger = logging.getLogger(__name__)


def parse_class(value: Union[str, CharacterClass, None]) -> CharacterClass:
    if isinstance(value, CharacterClass):
        return value
    try:
        return CharacterClass(str(value).lower())
    except ValueError:
        raise UnknownClassError(value) from None


def resolve_boss_abilities(ability_ids: Optional[Iterable[str]], owner: str = "") -> Tuple[Ability, ...]:
    resolved = []
    for ability_id in ability_ids or ():
        ability = BOSS_ABILITIES.get(ability_id)
        if ability is None:
            raise UnknownAbilityError(ability_id, owner)
        resolved.append(ability)
    return tuple(resolved)


def _coerce_stance(stance: Any, config: BalanceConfig) -> CombatStance:
    if stance is None:
        return default_stance()
    if isinstance(stance, CombatStance):
        reason = validate_stance(stance, config)
        if reason:
            raise InvalidStanceError(reason)
        return replace(stance, attack_zones=list(stance.attack_zones),
                       block_allocation=dict(stance.block_allocation))
    return parse_stance(stance, config)


def build_combatant_state(
    id: str,
    name: str,
    character_class: Union[str, CharacterClass],
    level: int,
    base_stats: Union[BaseStats, Mapping[str, Any], None] = None,
    armor: float = 0,
    origin: Optional[str] = None,
    equipment_bonuses: Optional[Mapping[str, float]] = None,
    stance: Any = None,
    zone_armor: Optional[Mapping[str, float]] = None,
    is_player: bool = True,
    boss_ability_ids: Optional[Iterable[str]] = None,
    config: BalanceConfig = DEFAULT_BALANCE,
) -> CombatantState:
    """Turn raw character data into a fight-ready CombatantState.

    Origin bonuses go on the raw stats first, then equipment deltas are
    folded in (ATK -> strength, DEF -> endurance, SPEED -> agility,
    HP -> max hp, CRIT -> crit chance, ARMOR -> flat armor). Invalid class,
    stance or boss ability ids raise before any state is produced.
    """
    klass = parse_class(character_class)
    combat_stance = _coerce_stance(stance, config)
    bosses = resolve_boss_abilities(boss_ability_ids, owner=name)

    if not isinstance(base_stats, BaseStats):
        base_stats = BaseStats.from_mapping(base_stats)
    # Origin scales the raw stats only; gear deltas are added unscaled on top.
    stats = apply_origin_bonuses(base_stats, origin)

    eq: Dict[str, float] = {k.upper(): v for k, v in (equipment_bonuses or {}).items()}
    stats = replace(
        stats,
        strength=stats.strength + int(eq.get("ATK", 0)),
        endurance=stats.endurance + int(eq.get("DEF", 0)),
        agility=stats.agility + int(eq.get("SPEED", 0)),
    )
    flat_armor = armor + eq.get("ARMOR", 0)
    max_hp = rules.max_hp_for(stats.vitality, config) + int(eq.get("HP", 0))

    if zone_armor is None:
        zones = even_zone_armor(flat_armor)
    else:
        zones = {zone: zone_armor.get(zone, 0) for zone in BODY_ZONES}

    state = CombatantState(
        id=id,
        name=name,
        character_class=klass,
        level=int(level),
        base_stats=stats,
        max_hp=max_hp,
        current_hp=max_hp,
        armor=flat_armor,
        crit_chance=rules.crit_chance(stats.agility, stats.luck, eq.get("CRIT", 0), config),
        crit_damage_mult=rules.crit_multiplier(stats.strength, config),
        dodge_chance=rules.dodge_chance(stats.agility, config),
        magic_resist=rules.magic_resist(stats.wisdom, config),
        stance=combat_stance,
        zone_armor=zones,
        origin=origin,
        is_player=is_player,
        boss_abilities=bosses,
    )
    logger.debug("built %s (%s L%d): hp=%d armor=%s", name, klass.value, state.level, max_hp, flat_armor)
    return state
