import json
import os

_TRUE = {"1", "true", "yes", "on"}


def load_json(path):
    """JSON file contents, or {} when the path is empty or missing."""
    if path and os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    return {}


def env(name, default=None):
    value = os.environ.get(name)
    return default if value is None or value == "" else value


def env_flag(name, default=False):
    value = env(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE
