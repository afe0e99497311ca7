# arena/engine/__init__.py
