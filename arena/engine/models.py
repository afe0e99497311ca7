# arena/engine/models.py
from dataclasses import asdict, dataclass, field, fields, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

BODY_ZONES: Tuple[str, ...] = ("head", "torso", "waist", "legs")

DOT_STATUSES = ("bleed", "poison", "burn")
HOT_STATUSES = ("regen",)
CONTROL_STATUSES = ("stun", "slow", "weaken")
BUFF_STATUSES = ("str_buff", "armor_buff", "resist_buff", "dodge_buff")
STATUS_TYPES = DOT_STATUSES + HOT_STATUSES + CONTROL_STATUSES + BUFF_STATUSES


class CharacterClass(str, Enum):
    WARRIOR = "warrior"
    ROGUE = "rogue"
    MAGE = "mage"
    TANK = "tank"


class AbilityKind(str, Enum):
    PHYSICAL = "physical"
    MAGIC = "magic"
    BUFF = "buff"


@dataclass(frozen=True)
class StatusApplication:
    status: str
    chance: float
    duration: int
    value: float = 0.0
    on_self: bool = False


@dataclass(frozen=True)
class SelfBuff:
    status: str
    value: float
    duration: int = 3


@dataclass(frozen=True)
class Ability:
    id: str
    name: str
    kind: AbilityKind
    multiplier: float = 0.0
    cooldown: int = 0
    unlock_level: int = 1
    description: str = ""
    hits: int = 1
    crit_bonus: float = 0.0
    armor_break: float = 0.0
    execute_threshold: float = 0.0
    first_strike_only: bool = False
    target_zone: Optional[str] = None
    ignores_block: bool = False
    aoe_zones: bool = False
    status: Optional[StatusApplication] = None
    self_buffs: Tuple[SelfBuff, ...] = ()

    @property
    def is_physical(self) -> bool:
        return self.kind is AbilityKind.PHYSICAL


@dataclass(frozen=True)
class BasicAttack:
    id: str = "basic"


@dataclass(frozen=True)
class UseAbility:
    ability: Ability

    @property
    def id(self) -> str:
        return self.ability.id


Action = Union[BasicAttack, UseAbility]
BASIC_ATTACK = BasicAttack()


@dataclass
class BaseStats:
    strength: int = 10
    agility: int = 10
    vitality: int = 10
    endurance: int = 10
    intelligence: int = 10
    wisdom: int = 10
    luck: int = 10
    charisma: int = 10

    @classmethod
    def from_mapping(cls, data: Optional[Dict[str, Any]]) -> "BaseStats":
        data = data or {}
        known = {f.name for f in fields(cls)}
        return cls(**{k: int(v) for k, v in data.items() if k in known and v is not None})

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass
class EquippedItem:
    slot: str
    stats: Dict[str, float] = field(default_factory=dict)
    name: str = ""
    category: Optional[str] = None        # weapon family, e.g. "sword"

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "EquippedItem":
        return cls(
            slot=str(data.get("slot") or data.get("equipped_slot") or ""),
            stats=dict(data.get("stats") or data.get("base_stats") or {}),
            name=str(data.get("name") or ""),
            category=data.get("category") or data.get("item_type"),
        )


@dataclass
class CombatStance:
    attack_zones: List[str]                 # first entry is the primary zone
    block_allocation: Dict[str, int]

    def to_dict(self) -> Dict[str, Any]:
        return {"attack_zones": list(self.attack_zones), "block_allocation": dict(self.block_allocation)}


@dataclass
class StatusEffect:
    type: str
    duration: int
    value: float = 0.0


@dataclass
class CombatantState:
    id: str
    name: str
    character_class: CharacterClass
    level: int
    base_stats: BaseStats
    max_hp: int
    current_hp: int
    armor: float
    crit_chance: float
    crit_damage_mult: float
    dodge_chance: float
    magic_resist: float
    stance: CombatStance
    zone_armor: Dict[str, float]
    origin: Optional[str] = None
    is_player: bool = True
    boss_abilities: Tuple[Ability, ...] = ()
    status_effects: List[StatusEffect] = field(default_factory=list)
    cooldowns: Dict[str, int] = field(default_factory=dict)
    has_struck: bool = False

    @property
    def alive(self) -> bool:
        return self.current_hp > 0

    def clone(self) -> "CombatantState":
        return replace(
            self,
            base_stats=replace(self.base_stats),
            zone_armor=dict(self.zone_armor),
            status_effects=[replace(s) for s in self.status_effects],
            cooldowns=dict(self.cooldowns),
        )


@dataclass(frozen=True)
class CombatantSnapshot:
    id: str
    name: str
    character_class: str
    origin: Optional[str]
    level: int
    current_hp: int
    max_hp: int
    base_stats: Dict[str, int]

    @classmethod
    def of(cls, state: CombatantState) -> "CombatantSnapshot":
        return cls(
            id=state.id,
            name=state.name,
            character_class=state.character_class.value,
            origin=state.origin,
            level=state.level,
            current_hp=state.current_hp,
            max_hp=state.max_hp,
            base_stats=state.base_stats.as_dict(),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["class"] = data.pop("character_class")
        return data


@dataclass(frozen=True)
class StatusTick:
    combatant_id: str
    status: str
    damage: int = 0
    healed: int = 0


@dataclass
class CombatLogEntry:
    turn: int
    actor_id: str
    target_id: str
    action: str
    message: str
    damage: Optional[int] = None
    healed: Optional[int] = None
    body_zone: Optional[str] = None
    block_reduction: Optional[float] = None
    blocked: Optional[bool] = None
    crit: bool = False
    dodge: bool = False
    status_applied: Optional[str] = None
    status_ticks: List[StatusTick] = field(default_factory=list)
    actor_hp_after: Optional[int] = None
    target_hp_after: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if f.name == "status_ticks":
                if not value:
                    continue
                value = [asdict(t) for t in value]
            out[f.name] = value
        return out


@dataclass(frozen=True)
class CombatResult:
    winner_id: Optional[str]
    loser_id: Optional[str]
    draw: bool
    turns: int
    log: Tuple[CombatLogEntry, ...]
    player_snapshot: CombatantSnapshot
    enemy_snapshot: CombatantSnapshot

    def to_dict(self) -> Dict[str, Any]:
        return {
            "winner_id": self.winner_id,
            "loser_id": self.loser_id,
            "draw": self.draw,
            "turns": self.turns,
            "log": [entry.to_dict() for entry in self.log],
            "player_snapshot": self.player_snapshot.to_dict(),
            "enemy_snapshot": self.enemy_snapshot.to_dict(),
        }
