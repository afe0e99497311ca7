# arena/engine/equipment.py
import math
from typing import Any, Dict, Iterable, Mapping, Optional

from .models import CharacterClass, EquippedItem
from ..content.balance import BalanceConfig, DEFAULT_BALANCE
from ..content.classes import CLASSES, WEAPON_KEYWORDS

EQUIPMENT_STAT_KEYS = ("ATK", "DEF", "HP", "CRIT", "SPEED", "ARMOR")
WEAPON_SLOTS = ("weapon", "weapon_offhand")


def _as_item(item: Any) -> EquippedItem:
    if isinstance(item, Mapping):
        return EquippedItem.from_mapping(item)
    return item


def weapon_category(item: EquippedItem) -> Optional[str]:
    if item.category:
        category = str(item.category).lower()
        if category in WEAPON_KEYWORDS:
            return category
    name = item.name.lower()
    for category, words in WEAPON_KEYWORDS.items():
        if any(word in name for word in words):
            return category
    return None


def has_weapon_affinity(character_class: Optional[CharacterClass], category: Optional[str]) -> bool:
    if character_class is None or category is None:
        return False
    return CLASSES[character_class]["weapon_affinity"] == category


def aggregate_equipment_stats(
    items: Iterable[Any],
    character_class: Optional[CharacterClass] = None,
    config: BalanceConfig = DEFAULT_BALANCE,
) -> Dict[str, int]:
    """Sum the combat-relevant stats of every equipped item.

    Weapons of the class's favoured family get every stat raised by the
    affinity bonus before flooring.
    """
    totals = {key: 0 for key in EQUIPMENT_STAT_KEYS}
    for raw in items:
        item = _as_item(raw)
        if not item.stats:
            continue
        mult = 1.0
        if item.slot in WEAPON_SLOTS and has_weapon_affinity(character_class, weapon_category(item)):
            mult = 1 + config.weapon_affinity_bonus
        for key in EQUIPMENT_STAT_KEYS:
            value = item.stats.get(key, item.stats.get(key.lower(), 0)) or 0
            totals[key] += int(math.floor(value * mult + 1e-9))
    return totals
