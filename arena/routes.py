# arena/routes.py
import logging

from flask import Blueprint, current_app, jsonify, request

from .content.balance import DEFAULT_BALANCE
from .content.opponents import DEFAULT_PRESET, OPPONENT_PRESETS
from .engine.builder import build_combatant_state
from .engine.dice import rng_for
from .engine.errors import ArenaError
from .engine.models import BaseStats
from .engine.resolver import run_combat
from .engine.zones import generate_boss_stance

logger = logging.getLogger(__name__)

arena_bp = Blueprint("arena", __name__, url_prefix="/api/combat")

REQUIRED_PLAYER_FIELDS = ("id", "name", "class", "level")


def _balance():
    return DEFAULT_BALANCE.with_overrides(current_app.config.get("ARENA_BALANCE"))


def _bad_request(reason: str):
    return jsonify({"error": reason}), 400


@arena_bp.route("/presets", methods=["GET"])
def list_presets():
    return jsonify({
        key: {"name": p["name"], "class": p["class"], "level": p["level"]}
        for key, p in OPPONENT_PRESETS.items()
    })


@arena_bp.route("/simulate", methods=["POST"])
def simulate():
    body = request.get_json(silent=True) or {}
    if not isinstance(body, dict):
        return _bad_request("Request body must be a JSON object")
    player_data = body.get("player")
    if not isinstance(player_data, dict) or not all(player_data.get(k) for k in REQUIRED_PLAYER_FIELDS):
        return _bad_request("player.id, player.name, player.class, player.level required")

    seed = body.get("seed")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        return _bad_request("seed must be an integer")

    config = _balance()
    preset = OPPONENT_PRESETS.get(body.get("opponent_preset") or "") or OPPONENT_PRESETS[DEFAULT_PRESET]
    r = rng_for(seed) if seed is not None else None

    try:
        player = build_combatant_state(
            id=str(player_data["id"]),
            name=str(player_data["name"]),
            character_class=player_data["class"],
            level=int(player_data["level"]),
            base_stats=BaseStats.from_mapping(player_data),
            armor=float(player_data.get("armor") or 0),
            origin=player_data.get("origin"),
            stance=body.get("stance"),
            config=config,
        )
        enemy = build_combatant_state(
            id="enemy",
            name=preset["name"],
            character_class=preset["class"],
            level=preset["level"],
            base_stats=BaseStats.from_mapping(preset["stats"]),
            armor=preset["armor"],
            stance=generate_boss_stance(preset["stance"], r, config),
            is_player=False,
            config=config,
        )
        result = run_combat(player, enemy, r=r, player_choices=body.get("player_choices") or [], config=config)
    except ArenaError as e:
        return _bad_request(str(e))
    except (TypeError, ValueError, OverflowError) as e:
        logger.info("rejected simulate payload: %s", e)
        return _bad_request("Malformed player data")

    return jsonify(result.to_dict())
