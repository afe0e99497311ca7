# arena/engine/dice.py
import random
from typing import Optional

from ..content.balance import BalanceConfig, DEFAULT_BALANCE


def rng_for(seed: int, fight: Optional[str] = None) -> random.Random:
    # deterministic per seed (+ optional fight key)
    if fight is None:
        return random.Random(seed)
    return random.Random(f"{seed}:{fight}")


def fresh_rng() -> random.Random:
    return random.SystemRandom()


def roll_percent(chance: float, r: random.Random) -> bool:
    """True with ``chance`` percent probability (0-100 scale)."""
    if chance <= 0:
        return False
    return r.random() * 100 < chance


def roll_fraction(chance: float, r: random.Random) -> bool:
    """True with ``chance`` probability (0-1 scale)."""
    if chance <= 0:
        return False
    return r.random() < chance


def damage_variance(r: random.Random, config: BalanceConfig = DEFAULT_BALANCE) -> float:
    return config.variance_min + r.random() * (config.variance_max - config.variance_min)
