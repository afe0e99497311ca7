# arena/content/stances.py
SLOT_TO_ZONE = {
    "helmet": "head",
    "chest": "torso",
    "gloves": "torso",
    "belt": "waist",
    "legs": "legs",
    "boots": "legs",
    # no zone affinity, armor is shared across the whole body
    "weapon": None,
    "weapon_offhand": None,
    "accessory": None,
    "amulet": None,
    "relic": None,
    "necklace": None,
    "ring": None,
}

BOSS_STANCES = {
    "aggressive": {
        "attack_zones": ["head"],
        "block_allocation": {"head": 0, "torso": 2, "waist": 1, "legs": 0},
    },
    "defensive": {
        "attack_zones": ["torso", "waist"],
        "block_allocation": {"head": 1, "torso": 1, "waist": 1, "legs": 0},
    },
    "berserker": {
        "attack_zones": ["head", "torso"],
        "block_allocation": {"head": 0, "torso": 0, "waist": 1, "legs": 2},
    },
    "tank": {
        "attack_zones": ["torso"],
        "block_allocation": {"head": 1, "torso": 2, "waist": 0, "legs": 0},
    },
    "assassin": {
        "attack_zones": ["head", "waist"],
        "block_allocation": {"head": 0, "torso": 0, "waist": 1, "legs": 2},
    },
}
