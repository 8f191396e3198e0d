import copy
import os
import yaml

DEFAULT_CONFIG = {
    "media": {
        "movie_extensions": [".mkv", ".mp4"],
        "subtitle_extensions": [".srt"],
    },
    "rename": {
        "ignore_number_difference": False,
    },
}

def get_config_path() -> str:
    return os.getenv("CONFIG_PATH", "config.yaml")

def merge_config(base: dict, override: dict) -> dict:
    """Mezcla recursiva: los valores del YAML pisan a los valores por defecto."""
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged

def load_config():
    config_path = get_config_path()
    if not os.path.exists(config_path):
        return copy.deepcopy(DEFAULT_CONFIG)
    with open(config_path, "r", encoding="utf-8") as f:
        return merge_config(DEFAULT_CONFIG, yaml.safe_load(f) or {})

config = load_config()

def reload_config():
    global config
    config = load_config()

def save_config(new_config: dict):
    config_path = get_config_path()
    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(new_config, f)
    reload_config()

def normalize_extension(ext: str) -> str:
    ext = ext.strip().lower()
    if ext and not ext.startswith("."):
        ext = "." + ext
    return ext

def get_ignore_number_difference() -> bool:
    # Solo un booleano YAML real activa la opción ("false" como texto no cuenta)
    return config.get("rename", {}).get("ignore_number_difference") is True

def get_movie_extensions() -> tuple:
    exts = config.get("media", {}).get("movie_extensions") or DEFAULT_CONFIG["media"]["movie_extensions"]
    return tuple(normalize_extension(e) for e in exts)

def get_subtitle_extensions() -> tuple:
    exts = config.get("media", {}).get("subtitle_extensions") or DEFAULT_CONFIG["media"]["subtitle_extensions"]
    return tuple(normalize_extension(e) for e in exts)
