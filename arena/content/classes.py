# arena/content/classes.py
from ..engine.models import CharacterClass

CLASSES = {
    CharacterClass.WARRIOR: {
        "name": "Warrior",
        "primary_stat": "strength",
        "weapon_affinity": "sword",
    },
    CharacterClass.ROGUE: {
        "name": "Rogue",
        "primary_stat": "agility",
        "weapon_affinity": "dagger",
    },
    CharacterClass.MAGE: {
        "name": "Mage",
        "primary_stat": "intelligence",
        "weapon_affinity": "staff",
    },
    CharacterClass.TANK: {
        "name": "Tank",
        "primary_stat": "endurance",
        "weapon_affinity": "mace",
    },
}

# name fragments used to guess a weapon's family when it carries no category
WEAPON_KEYWORDS = {
    "sword": ("sword", "blade", "saber", "cutter"),
    "dagger": ("dagger", "knife", "shiv", "fang", "talon"),
    "mace": ("mace", "hammer", "maul", "crusher", "club"),
    "staff": ("staff", "rod", "scepter", "channeler"),
}
