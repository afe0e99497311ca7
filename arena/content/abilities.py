# arena/content/abilities.py
from ..engine.models import Ability, AbilityKind, CharacterClass, SelfBuff, StatusApplication

PHYSICAL = AbilityKind.PHYSICAL
MAGIC = AbilityKind.MAGIC
BUFF = AbilityKind.BUFF

# Unlocked at levels 5 / 10 / 15 / 20 in list order.
CLASS_ABILITIES = {
    CharacterClass.WARRIOR: (
        Ability(
            id="heavy_strike",
            name="Heavy Strike",
            kind=PHYSICAL,
            multiplier=2.0,
            cooldown=3,
            unlock_level=5,
            description="A crushing blow that may stun.",
            status=StatusApplication("stun", chance=0.15, duration=1),
        ),
        Ability(
            id="battle_cry",
            name="Battle Cry",
            kind=BUFF,
            cooldown=6,
            unlock_level=10,
            description="Raise strength by 30% for three turns.",
            self_buffs=(SelfBuff("str_buff", 0.30),),
        ),
        Ability(
            id="whirlwind",
            name="Whirlwind",
            kind=PHYSICAL,
            multiplier=1.5,
            cooldown=4,
            unlock_level=15,
            description="Two spinning strikes across the whole body.",
            hits=2,
            aoe_zones=True,
        ),
        Ability(
            id="titan_slam",
            name="Titan Slam",
            kind=PHYSICAL,
            multiplier=3.5,
            cooldown=5,
            unlock_level=20,
            description="Smash the head and shatter armor.",
            armor_break=0.5,
            target_zone="head",
        ),
    ),
    CharacterClass.ROGUE: (
        Ability(
            id="quick_strike",
            name="Quick Strike",
            kind=PHYSICAL,
            multiplier=1.6,
            cooldown=2,
            unlock_level=5,
            crit_bonus=20,
        ),
        Ability(
            id="shadow_step",
            name="Shadow Step",
            kind=BUFF,
            cooldown=5,
            unlock_level=10,
            description="Vanish into shadow, +50 dodge for two turns.",
            self_buffs=(SelfBuff("dodge_buff", 50, duration=2),),
        ),
        Ability(
            id="backstab",
            name="Backstab",
            kind=PHYSICAL,
            multiplier=2.5,
            cooldown=3,
            unlock_level=15,
            description="Opening strike to the waist that slips past any block.",
            first_strike_only=True,
            target_zone="waist",
            ignores_block=True,
        ),
        Ability(
            id="assassinate",
            name="Assassinate",
            kind=PHYSICAL,
            multiplier=4.0,
            cooldown=6,
            unlock_level=20,
            description="Guaranteed critical damage on targets below 30% health.",
            execute_threshold=0.3,
        ),
    ),
    CharacterClass.MAGE: (
        Ability(
            id="fireball",
            name="Fireball",
            kind=MAGIC,
            multiplier=2.2,
            cooldown=2,
            unlock_level=5,
            status=StatusApplication("burn", chance=0.18, duration=3),
        ),
        Ability(
            id="frost_nova",
            name="Frost Nova",
            kind=MAGIC,
            multiplier=1.8,
            cooldown=4,
            unlock_level=10,
            status=StatusApplication("slow", chance=0.25, duration=2),
        ),
        Ability(
            id="lightning_strike",
            name="Lightning Strike",
            kind=MAGIC,
            multiplier=2.8,
            cooldown=3,
            unlock_level=15,
            status=StatusApplication("stun", chance=0.10, duration=1),
        ),
        Ability(
            id="meteor_storm",
            name="Meteor Storm",
            kind=MAGIC,
            multiplier=3.8,
            cooldown=6,
            unlock_level=20,
        ),
    ),
    CharacterClass.TANK: (
        Ability(
            id="shield_bash",
            name="Shield Bash",
            kind=PHYSICAL,
            multiplier=1.4,
            cooldown=2,
            unlock_level=5,
            target_zone="head",
        ),
        Ability(
            id="iron_wall",
            name="Iron Wall",
            kind=BUFF,
            cooldown=6,
            unlock_level=10,
            description="Armor +80% for three turns.",
            self_buffs=(SelfBuff("armor_buff", 0.80),),
        ),
        Ability(
            id="counter_strike",
            name="Counter Strike",
            kind=PHYSICAL,
            multiplier=1.2,
            cooldown=4,
            unlock_level=15,
        ),
        Ability(
            id="immovable_object",
            name="Immovable Object",
            kind=BUFF,
            cooldown=8,
            unlock_level=20,
            description="Status resist +60 for three turns.",
            self_buffs=(SelfBuff("resist_buff", 60),),
        ),
    ),
}

ABILITIES = {
    ability.id: ability
    for abilities in CLASS_ABILITIES.values()
    for ability in abilities
}
