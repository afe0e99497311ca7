# arena/engine/errors.py
from typing import Optional


class ArenaError(Exception):
    """Base class for every error raised by the arena engine."""


class ConfigError(ArenaError):
    pass


class InvalidStanceError(ArenaError):
    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class UnknownClassError(ArenaError):
    def __init__(self, class_id: Optional[str]):
        super().__init__(f"Unknown character class: {class_id}")
        self.class_id = class_id


class UnknownAbilityError(ArenaError):
    def __init__(self, ability_id: str, owner: str = ""):
        where = f" for {owner}" if owner else ""
        super().__init__(f"Unknown ability{where}: {ability_id}")
        self.ability_id = ability_id
