# arena/content/boss_abilities.py
from ..engine.models import Ability, AbilityKind, SelfBuff, StatusApplication

PHYSICAL = AbilityKind.PHYSICAL
MAGIC = AbilityKind.MAGIC
BUFF = AbilityKind.BUFF


def _boss(ability_id: str, name: str, kind: AbilityKind, **kwargs) -> Ability:
    return Ability(id=ability_id, name=name, kind=kind, unlock_level=1, **kwargs)


_POOL = (
    # physical
    _boss("boss_crushing_blow", "Crushing Blow", PHYSICAL, multiplier=2.2, cooldown=4, armor_break=0.3),
    _boss("boss_tail_swipe", "Tail Swipe", PHYSICAL, multiplier=1.4, cooldown=3, hits=2),
    _boss("boss_frenzy", "Frenzy", PHYSICAL, multiplier=1.2, cooldown=5, hits=3),
    _boss(
        "boss_ground_slam", "Ground Slam", PHYSICAL, multiplier=2.5, cooldown=5,
        status=StatusApplication("stun", chance=0.25, duration=1),
    ),
    _boss(
        "boss_impale", "Impale", PHYSICAL, multiplier=2.0, cooldown=4,
        status=StatusApplication("bleed", chance=0.35, duration=3),
    ),
    _boss("boss_charge", "Charge", PHYSICAL, multiplier=2.8, cooldown=6, first_strike_only=True),
    _boss(
        "boss_rend", "Rend", PHYSICAL, multiplier=1.6, cooldown=3, crit_bonus=10,
        status=StatusApplication("bleed", chance=0.40, duration=3),
    ),
    # magic
    _boss(
        "boss_shadow_bolt", "Shadow Bolt", MAGIC, multiplier=2.4, cooldown=3,
        status=StatusApplication("weaken", chance=0.20, duration=2),
    ),
    _boss(
        "boss_frost_breath", "Frost Breath", MAGIC, multiplier=2.0, cooldown=4,
        status=StatusApplication("slow", chance=0.30, duration=2),
    ),
    _boss(
        "boss_fire_wave", "Fire Wave", MAGIC, multiplier=1.8, cooldown=4, hits=2,
        status=StatusApplication("burn", chance=0.25, duration=3),
    ),
    _boss(
        "boss_poison_cloud", "Poison Cloud", MAGIC, multiplier=1.4, cooldown=5,
        status=StatusApplication("poison", chance=0.45, duration=4),
    ),
    _boss(
        "boss_life_drain", "Life Drain", MAGIC, multiplier=2.0, cooldown=5,
        status=StatusApplication("regen", chance=1.0, duration=2, on_self=True),
    ),
    _boss(
        "boss_chain_lightning", "Chain Lightning", MAGIC, multiplier=1.5, cooldown=5, hits=3,
        status=StatusApplication("stun", chance=0.15, duration=1),
    ),
    _boss("boss_arcane_burst", "Arcane Burst", MAGIC, multiplier=3.2, cooldown=6),
    # self buffs
    _boss("boss_enrage", "Enrage", BUFF, cooldown=7, self_buffs=(SelfBuff("str_buff", 0.35),)),
    _boss("boss_stone_skin", "Stone Skin", BUFF, cooldown=6, self_buffs=(SelfBuff("armor_buff", 0.60),)),
    _boss("boss_dark_shield", "Dark Shield", BUFF, cooldown=6, self_buffs=(SelfBuff("resist_buff", 50),)),
    _boss("boss_regeneration", "Regeneration", BUFF, cooldown=7, self_buffs=(SelfBuff("regen", 0.08),)),
    _boss(
        "boss_battle_roar", "Battle Roar", BUFF, cooldown=6,
        self_buffs=(SelfBuff("str_buff", 0.20),),
        status=StatusApplication("stun", chance=0.20, duration=1),
    ),
    _boss("boss_haste", "Haste", BUFF, cooldown=7, self_buffs=(SelfBuff("dodge_buff", 35, duration=3),)),
)

BOSS_ABILITIES = {ability.id: ability for ability in _POOL}
