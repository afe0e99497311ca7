# arena/content/origins.py
# Stat modifiers are fractions of the base value.
ORIGINS = {
    "human": {
        "name": "Human",
        "stat_modifiers": {
            "strength": 0.05,
            "agility": 0.05,
            "vitality": 0.05,
            "endurance": 0.05,
            "intelligence": 0.05,
            "wisdom": 0.05,
            "luck": 0.05,
            "charisma": 0.05,
        },
    },
    "orc": {
        "name": "Orc",
        "stat_modifiers": {"strength": 0.08, "endurance": -0.03},
    },
    "skeleton": {
        "name": "Skeleton",
        "stat_modifiers": {"agility": 0.06, "luck": 0.04},
    },
    "demon": {
        "name": "Demon",
        "stat_modifiers": {"endurance": 0.08, "vitality": 0.05},
    },
    "dogfolk": {
        "name": "Dogfolk",
        "stat_modifiers": {},
        "passive": {"id": "cheating_death", "chance": 0.05},
    },
}
