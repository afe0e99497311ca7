# arena/engine/effects.py
import math
import random
from typing import List, Optional, Tuple

from . import rules
from .dice import roll_fraction, roll_percent
from .errors import ArenaError
from .models import (
    BODY_ZONES,
    DOT_STATUSES,
    HOT_STATUSES,
    STATUS_TYPES,
    Ability,
    CombatantState,
    StatusApplication,
    StatusEffect,
    StatusTick,
)
from .origins import get_cheat_death_chance, has_cheat_death
from ..content.balance import BalanceConfig, DEFAULT_BALANCE

# Statuses that are used up by the holder's action rather than ticking down.
CONSUMED_ON_ACTION = ("stun",)


def get_status(state: CombatantState, status: str) -> Optional[StatusEffect]:
    for effect in state.status_effects:
        if effect.type == status:
            return effect
    return None


def has_status(state: CombatantState, status: str) -> bool:
    return get_status(state, status) is not None


def status_value(state: CombatantState, status: str) -> float:
    return sum(e.value for e in state.status_effects if e.type == status)


def add_status(state: CombatantState, status: str, duration: int, value: float = 0.0) -> None:
    """Apply a status; re-applying refreshes the duration and keeps the stronger value."""
    if status not in STATUS_TYPES:
        raise ArenaError(f"Unknown status effect: {status}")
    existing = get_status(state, status)
    if existing is None:
        state.status_effects.append(StatusEffect(type=status, duration=duration, value=value))
        return
    existing.duration = max(existing.duration, duration)
    existing.value = max(existing.value, value)


def consume_status(state: CombatantState, status: str) -> None:
    effect = get_status(state, status)
    if effect is None:
        return
    effect.duration -= 1
    if effect.duration <= 0:
        state.status_effects.remove(effect)


# ---------- effective stats ----------

def effective_strength(state: CombatantState) -> int:
    bonus = status_value(state, "str_buff")
    return int(math.floor(state.base_stats.strength * (1 + bonus)))


def effective_agility(state: CombatantState, config: BalanceConfig = DEFAULT_BALANCE) -> float:
    agility = float(state.base_stats.agility)
    if has_status(state, "slow"):
        agility *= config.slow_agility_mult
    return agility


def effective_dodge(state: CombatantState, config: BalanceConfig = DEFAULT_BALANCE) -> float:
    return min(config.max_dodge, state.dodge_chance + status_value(state, "dodge_buff"))


def effective_zone_armor(state: CombatantState, zone: str) -> float:
    return state.zone_armor.get(zone, 0) * (1 + status_value(state, "armor_buff"))


def status_resist(state: CombatantState, config: BalanceConfig = DEFAULT_BALANCE) -> float:
    base = rules.status_resist_chance(state.base_stats.endurance, state.base_stats.wisdom, 0, config)
    return rules.clamp(base + status_value(state, "resist_buff"), 0.0, 100.0)


# ---------- hp changes ----------

def apply_damage(state: CombatantState, amount: int, r: random.Random,
                 config: BalanceConfig = DEFAULT_BALANCE) -> Tuple[int, bool]:
    """Subtract ``amount`` from hp. Returns (damage, cheated_death).

    A lethal blow against a combatant whose origin can cheat death (and who
    still has more than 1 hp) rolls the origin chance; on success the
    combatant is left on 1 hp.
    """
    if state.current_hp - amount <= 0 and state.current_hp > 1 and has_cheat_death(state.origin):
        if roll_fraction(get_cheat_death_chance(state.origin), r):
            state.current_hp = 1
            return amount, True
    state.current_hp = max(0, state.current_hp - amount)
    return amount, False


def heal(state: CombatantState, amount: int) -> int:
    healed = max(0, min(amount, state.max_hp - state.current_hp))
    state.current_hp += healed
    return healed


# ---------- application ----------

def apply_self_buffs(actor: CombatantState, ability: Ability) -> List[str]:
    applied = []
    for buff in ability.self_buffs:
        add_status(actor, buff.status, buff.duration, buff.value)
        applied.append(buff.status)
    return applied


def try_apply_status(actor: CombatantState, target: CombatantState, application: StatusApplication,
                     r: random.Random, config: BalanceConfig = DEFAULT_BALANCE) -> Optional[str]:
    """Roll an ability's status proc. Returns the status type when it lands."""
    if not roll_fraction(application.chance, r):
        return None
    if application.on_self:
        add_status(actor, application.status, application.duration, application.value)
        return application.status
    if roll_percent(status_resist(target, config), r):
        return None
    add_status(target, application.status, application.duration, application.value)
    return application.status


def apply_armor_break(target: CombatantState, fraction: float) -> None:
    keep = max(0.0, 1 - fraction)
    for zone in BODY_ZONES:
        target.zone_armor[zone] = target.zone_armor.get(zone, 0) * keep
    target.armor = target.armor * keep


def tick_cooldowns(state: CombatantState) -> None:
    state.cooldowns = {k: v - 1 for k, v in state.cooldowns.items() if v - 1 > 0}


def tick_statuses(state: CombatantState, r: random.Random,
                  config: BalanceConfig = DEFAULT_BALANCE) -> Tuple[List[StatusTick], List[str]]:
    """Run damage/heal over time, then count every timed status down by one."""
    ticks: List[StatusTick] = []
    notes: List[str] = []
    for effect in list(state.status_effects):
        if effect.type not in DOT_STATUSES + HOT_STATUSES or not state.alive:
            continue
        pct = effect.value if effect.value > 0 else config.status_tick_pct.get(effect.type, 0.0)
        amount = max(1, int(math.floor(state.max_hp * pct)))
        if effect.type in HOT_STATUSES:
            healed = heal(state, amount)
            ticks.append(StatusTick(state.id, effect.type, healed=healed))
            notes.append(f"{state.name} regenerates {healed} HP")
            continue
        dealt, cheated = apply_damage(state, amount, r, config)
        ticks.append(StatusTick(state.id, effect.type, damage=dealt))
        notes.append(f"{state.name} takes {dealt} {effect.type} damage")
        if cheated:
            notes.append(f"{state.name} cheated death! (1 HP)")

    remaining = []
    for effect in state.status_effects:
        if effect.type in CONSUMED_ON_ACTION:
            remaining.append(effect)
            continue
        effect.duration -= 1
        if effect.duration > 0:
            remaining.append(effect)
    state.status_effects = remaining
    return ticks, notes
