# arena/content/opponents.py
# Practice opponents for the simulation endpoint.
OPPONENT_PRESETS = {
    "warrior": {
        "name": "Test Warrior",
        "class": "warrior",
        "level": 10,
        "stance": "aggressive",
        "stats": {"strength": 85, "agility": 20, "vitality": 40, "endurance": 25,
                  "intelligence": 10, "wisdom": 10, "luck": 10, "charisma": 10},
        "armor": 50,
    },
    "rogue": {
        "name": "Test Rogue",
        "class": "rogue",
        "level": 10,
        "stance": "assassin",
        "stats": {"strength": 50, "agility": 75, "vitality": 30, "endurance": 20,
                  "intelligence": 10, "wisdom": 10, "luck": 40, "charisma": 10},
        "armor": 30,
    },
    "mage": {
        "name": "Test Mage",
        "class": "mage",
        "level": 10,
        "stance": "defensive",
        "stats": {"strength": 10, "agility": 25, "vitality": 35, "endurance": 10,
                  "intelligence": 90, "wisdom": 50, "luck": 20, "charisma": 10},
        "armor": 20,
    },
    "tank": {
        "name": "Test Tank",
        "class": "tank",
        "level": 10,
        "stance": "tank",
        "stats": {"strength": 35, "agility": 25, "vitality": 60, "endurance": 55,
                  "intelligence": 10, "wisdom": 20, "luck": 10, "charisma": 10},
        "armor": 80,
    },
}

DEFAULT_PRESET = "warrior"
