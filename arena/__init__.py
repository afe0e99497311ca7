# arena/__init__.py
from .routes import arena_bp


def init_arena(app):
    app.register_blueprint(arena_bp)
