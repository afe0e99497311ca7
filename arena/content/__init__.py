# arena/content/__init__.py
