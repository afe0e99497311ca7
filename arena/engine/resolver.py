# arena/engine/resolver.py
import logging
import random
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from . import rules
from .dice import damage_variance, fresh_rng, roll_percent
from .effects import (
    apply_armor_break,
    apply_damage,
    apply_self_buffs,
    consume_status,
    effective_agility,
    effective_dodge,
    effective_strength,
    effective_zone_armor,
    has_status,
    tick_cooldowns,
    tick_statuses,
    try_apply_status,
)
from .errors import ArenaError, UnknownAbilityError
from .models import (
    BASIC_ATTACK,
    Ability,
    AbilityKind,
    Action,
    CombatantSnapshot,
    CombatantState,
    CombatLogEntry,
    CombatResult,
    UseAbility,
)
from .zones import calc_block_reduction, resolve_hit_zone, spread_hit_zones, zone_damage_multiplier
from ..content.abilities import CLASS_ABILITIES
from ..content.balance import BalanceConfig, DEFAULT_BALANCE

logger = logging.getLogger(__name__)

IN_PROGRESS = "in_progress"
VICTORY = "victory"
DRAW = "draw"


@dataclass
class FightState:
    combatants: Dict[str, CombatantState]
    order: Tuple[str, str]                              # (player id, enemy id)
    scripted: Dict[str, List[Action]] = field(default_factory=dict)
    actions_taken: Dict[str, int] = field(default_factory=dict)
    turn: int = 0
    log: List[CombatLogEntry] = field(default_factory=list)
    phase: str = IN_PROGRESS
    winner_id: Optional[str] = None
    loser_id: Optional[str] = None


# ---------- action selection ----------

def ability_pool(actor: CombatantState) -> Sequence[Ability]:
    if not actor.is_player and actor.boss_abilities:
        return actor.boss_abilities
    return CLASS_ABILITIES.get(actor.character_class, ())


def is_usable(actor: CombatantState, ability: Ability) -> bool:
    if ability.unlock_level > actor.level:
        return False
    if actor.cooldowns.get(ability.id, 0) > 0:
        return False
    if ability.first_strike_only and actor.has_struck:
        return False
    return True


def available_abilities(actor: CombatantState) -> List[Ability]:
    return [a for a in ability_pool(actor) if is_usable(actor, a)]


def parse_choices(actor: CombatantState, choices: Optional[Iterable[str]]) -> List[Action]:
    """Turn scripted ability ids into actions; "basic" is the basic attack."""
    by_id = {a.id: a for a in ability_pool(actor)}
    actions: List[Action] = []
    for choice in choices or ():
        if choice == BASIC_ATTACK.id:
            actions.append(BASIC_ATTACK)
            continue
        ability = by_id.get(choice)
        if ability is None:
            raise UnknownAbilityError(choice, actor.name)
        actions.append(UseAbility(ability))
    return actions


def choose_action(actor: CombatantState, r: random.Random, scripted: Optional[Action] = None,
                  config: BalanceConfig = DEFAULT_BALANCE) -> Action:
    if scripted is not None:
        if isinstance(scripted, UseAbility) and not is_usable(actor, scripted.ability):
            return BASIC_ATTACK
        return scripted
    pool = available_abilities(actor)
    chance = config.player_skill_use_chance if actor.is_player else config.enemy_skill_use_chance
    if pool and r.random() < chance:
        return UseAbility(r.choice(pool))
    return BASIC_ATTACK


# ---------- single action ----------

def _entry(turn: int, actor: CombatantState, target: CombatantState, action_id: str, message: str,
           **kwargs) -> CombatLogEntry:
    return CombatLogEntry(
        turn=turn,
        actor_id=actor.id,
        target_id=target.id,
        action=action_id,
        message=message,
        actor_hp_after=actor.current_hp,
        target_hp_after=target.current_hp,
        **kwargs,
    )


def _strike(actor: CombatantState, target: CombatantState, ability: Optional[Ability], zone: Optional[str],
            hits: int, turn: int, r: random.Random, config: BalanceConfig) -> CombatLogEntry:
    action_id = ability.id if ability else BASIC_ATTACK.id
    label = ability.name if ability else "a basic attack"
    physical = ability is None or ability.kind is AbilityKind.PHYSICAL

    if roll_percent(effective_dodge(target, config), r):
        return _entry(turn, actor, target, action_id,
                      f"{target.name} dodges {actor.name}'s {label}! DODGE!", damage=0, dodge=True)

    multiplier = ability.multiplier if ability else 1.0
    if physical:
        if zone is None:
            zone = (ability.target_zone if ability else None) or resolve_hit_zone(actor.stance, r, config)
        raw = rules.physical_base(effective_strength(actor), multiplier, target.base_stats.endurance, config)
        raw *= zone_damage_multiplier(zone, config)
    else:
        raw = rules.magic_base(actor.base_stats.intelligence, multiplier, target.base_stats.wisdom, config)
    raw *= damage_variance(r, config)
    if has_status(actor, "weaken"):
        raw *= config.weaken_damage_mult

    crit_pct = min(config.max_crit_chance, actor.crit_chance + (ability.crit_bonus if ability else 0))
    crit = roll_percent(crit_pct, r)
    executed = False
    if crit:
        raw *= actor.crit_damage_mult
    elif ability and ability.execute_threshold and \
            target.current_hp / max(1, target.max_hp) <= ability.execute_threshold:
        raw *= actor.crit_damage_mult
        executed = True

    block = 0.0
    if physical:
        if not (ability and ability.ignores_block):
            block = calc_block_reduction(zone, target.stance, config)
        raw *= 1 - block
        raw *= 1 - rules.armor_reduction(effective_zone_armor(target, zone), config)
    else:
        raw *= 1 - target.magic_resist

    damage = rules.finalize_damage(raw) * max(1, hits)
    dealt, cheated = apply_damage(target, damage, r, config)

    parts = [f"{actor.name} hits {target.name}"]
    if physical:
        parts.append(f"in the {zone}")
    parts.append(f"with {label} for {dealt} damage")
    if hits > 1:
        parts.append(f"({hits} hits)")
    message = " ".join(parts)
    if crit:
        message += " CRIT!"
    if executed:
        message += " EXECUTE!"
    if block:
        message += f" ({int(round(block * 100))}% blocked)"
    if cheated:
        message += f" {target.name} cheated death! (1 HP)"

    applied = None
    if ability is not None:
        if ability.armor_break and target.alive:
            apply_armor_break(target, ability.armor_break)
            message += f" {target.name}'s armor cracks!"
        if ability.status is not None and (target.alive or ability.status.on_self):
            applied = try_apply_status(actor, target, ability.status, r, config)
            if applied:
                message += f" [{applied}]"

    extra = {}
    if physical:
        extra = {"body_zone": zone, "block_reduction": block, "blocked": block > 0}
    return _entry(turn, actor, target, action_id, message,
                  damage=dealt, crit=crit, status_applied=applied, **extra)


def resolve_action(actor: CombatantState, target: CombatantState, action: Action, turn: int,
                   r: random.Random, config: BalanceConfig = DEFAULT_BALANCE,
                   ) -> Tuple[CombatantState, CombatantState, List[CombatLogEntry]]:
    """Resolve one action. Returns new (actor, target) states plus the log entries it produced.

    The inputs are left untouched.
    """
    actor = actor.clone()
    target = target.clone()
    ability = action.ability if isinstance(action, UseAbility) else None
    if ability is not None:
        actor.cooldowns[ability.id] = ability.cooldown

    if ability is not None and ability.kind is AbilityKind.BUFF:
        buffs = apply_self_buffs(actor, ability)
        applied = None
        if ability.status is not None:
            applied = try_apply_status(actor, target, ability.status, r, config)
        message = f"{actor.name} uses {ability.name}"
        if buffs:
            message += f" ({', '.join(buffs)})"
        if applied:
            message += f" [{applied}]"
        return actor, target, [_entry(turn, actor, target, ability.id, message, status_applied=applied)]

    entries: List[CombatLogEntry] = []
    if ability is not None and ability.aoe_zones and ability.is_physical:
        for zone in spread_hit_zones(ability.hits, r, config):
            entries.append(_strike(actor, target, ability, zone, 1, turn, r, config))
            if not target.alive:
                break
    else:
        hits = ability.hits if ability else 1
        entries.append(_strike(actor, target, ability, None, hits, turn, r, config))
    actor.has_struck = True
    return actor, target, entries


# ---------- turn loop ----------

def turn_order(a: CombatantState, b: CombatantState,
               config: BalanceConfig = DEFAULT_BALANCE) -> List[CombatantState]:
    return sorted([a, b], key=lambda c: (-effective_agility(c, config), c.id))


def _settle(fight: FightState, config: BalanceConfig) -> FightState:
    first, second = (fight.combatants[cid] for cid in fight.order)
    if first.alive and second.alive:
        if fight.turn < config.max_turns:
            return fight
        if config.decide_by_hp_at_cap:
            a_frac = first.current_hp / first.max_hp
            b_frac = second.current_hp / second.max_hp
            if a_frac != b_frac:
                winner, loser = (first, second) if a_frac > b_frac else (second, first)
                return replace(fight, phase=VICTORY, winner_id=winner.id, loser_id=loser.id)
        return replace(fight, phase=DRAW)
    if not first.alive and not second.alive:
        return replace(fight, phase=DRAW)
    winner, loser = (first, second) if first.alive else (second, first)
    return replace(fight, phase=VICTORY, winner_id=winner.id, loser_id=loser.id)


def step_turn(fight: FightState, r: random.Random, config: BalanceConfig = DEFAULT_BALANCE) -> FightState:
    """Advance a fight by one full turn and return the new fight state."""
    if fight.phase != IN_PROGRESS:
        return fight
    turn = fight.turn + 1
    combatants = {cid: c.clone() for cid, c in fight.combatants.items()}
    actions_taken = dict(fight.actions_taken)
    log = list(fight.log)

    ticks, notes = [], []
    for cid in fight.order:
        t, n = tick_statuses(combatants[cid], r, config)
        ticks.extend(t)
        notes.extend(n)
    if ticks:
        first, second = (combatants[cid] for cid in fight.order)
        log.append(_entry(turn, first, second, "status_tick", "; ".join(notes), status_ticks=ticks))

    if all(c.alive for c in combatants.values()):
        for c in combatants.values():
            tick_cooldowns(c)
        a, b = (combatants[cid] for cid in fight.order)
        for acting in turn_order(a, b, config):
            actor = combatants[acting.id]
            target_id = next(cid for cid in fight.order if cid != actor.id)
            target = combatants[target_id]
            if not actor.alive or not target.alive:
                break
            if has_status(actor, "stun"):
                consume_status(actor, "stun")
                log.append(_entry(turn, actor, target, "stun", f"{actor.name} is stunned and cannot act!"))
                continue
            taken = actions_taken.get(actor.id, 0)
            script = fight.scripted.get(actor.id, [])
            scripted = script[taken] if taken < len(script) else None
            actions_taken[actor.id] = taken + 1
            action = choose_action(actor, r, scripted, config)
            actor, target, entries = resolve_action(actor, target, action, turn, r, config)
            combatants[actor.id] = actor
            combatants[target.id] = target
            log.extend(entries)

    fight = replace(fight, combatants=combatants, actions_taken=actions_taken, turn=turn, log=log)
    return _settle(fight, config)


def run_combat(
    player: CombatantState,
    enemy: CombatantState,
    r: Optional[random.Random] = None,
    player_choices: Optional[Iterable[str]] = None,
    enemy_choices: Optional[Iterable[str]] = None,
    config: BalanceConfig = DEFAULT_BALANCE,
) -> CombatResult:
    """Fight ``player`` against ``enemy`` to a verdict.

    Scripted choices are ability ids (or "basic") consumed one per action;
    unknown ids raise before the first turn. Input states are not modified.
    """
    if player.id == enemy.id:
        raise ArenaError(f"Combatants need distinct ids, both are {player.id!r}")
    r = r or fresh_rng()
    fight = FightState(
        combatants={player.id: player.clone(), enemy.id: enemy.clone()},
        order=(player.id, enemy.id),
        scripted={
            player.id: parse_choices(player, player_choices),
            enemy.id: parse_choices(enemy, enemy_choices),
        },
    )
    logger.debug("fight start: %s vs %s", player.name, enemy.name)
    while fight.phase == IN_PROGRESS:
        fight = step_turn(fight, r, config)

    logger.debug("fight end after %d turns: %s (winner=%s)", fight.turn, fight.phase, fight.winner_id)
    return CombatResult(
        winner_id=fight.winner_id,
        loser_id=fight.loser_id,
        draw=fight.phase == DRAW,
        turns=fight.turn,
        log=tuple(fight.log),
        player_snapshot=CombatantSnapshot.of(player),
        enemy_snapshot=CombatantSnapshot.of(enemy),
    )
