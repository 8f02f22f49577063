import json
from et.common.logger import log
from et.common.setup import PATHS


_SCHEMA_VERSION = 1

#region === Helpers and Paths ===

SETTINGS_PATH = PATHS.settings

# Default values for every setting the app reads.
_SETTINGS_DEFAULTS = {
    "window_title": "Egg timer",
    "window_width": 400,
    "window_height": 600,
    "tick_interval_ms": 40,
    "tick_increment": 0.004,
    "input_placeholder": "sec",
    "egg_a": 110.0,
    "egg_b": 150.0,
    "egg_d": 20.0,
    "always_on_top": False,
    "log_console": False,
}

def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)

def _positive(value):
    return _is_number(value) and value > 0

# Per-key validity checks. A value that fails its check is replaced by the default.
_SETTINGS_CHECKS = {
    "window_title": lambda v: isinstance(v, str) and bool(v.strip()),
    "window_width": lambda v: isinstance(v, int) and not isinstance(v, bool) and v > 0,
    "window_height": lambda v: isinstance(v, int) and not isinstance(v, bool) and v > 0,
    "tick_interval_ms": lambda v: isinstance(v, int) and not isinstance(v, bool) and v > 0,
    "tick_increment": lambda v: _positive(v) and v <= 1,
    "input_placeholder": lambda v: isinstance(v, str),
    "egg_a": _positive,
    "egg_b": _positive,
    "egg_d": lambda v: _is_number(v) and v >= 0,
    "always_on_top": lambda v: isinstance(v, bool),
    "log_console": lambda v: isinstance(v, bool),
}

# Helper to return a truly fresh, default settings dict.
def build_default_settings():
    settings = dict(_SETTINGS_DEFAULTS)
    settings["schema_version"] = _SCHEMA_VERSION
    return settings

#endregion === Helpers and Paths ===

#region === Saving and Loading Settings ===

# Loads settings from SETTINGS_PATH, validating every key and defaulting whatever is missing or unusable. A
# missing file gets written out with defaults so there's something to hand-edit.
def load_settings():
    try:
        if not SETTINGS_PATH.exists():
            settings = build_default_settings()
            save_settings(settings)
            log.info(f"No existing settings.json found, wrote fresh defaults to '{SETTINGS_PATH}'.")
            return settings

        with open(SETTINGS_PATH, "r", encoding="utf-8") as f:
            settings = json.load(f)
        if not isinstance(settings, dict):
            raise TypeError(f"settings.json must hold an object, got {type(settings).__name__}")

        defaulted_values = set()
        if not isinstance(settings.get("schema_version"), int):
            defaulted_values.add("schema_version")
            settings["schema_version"] = _SCHEMA_VERSION
        for key, default in _SETTINGS_DEFAULTS.items():
            if key not in settings or not _SETTINGS_CHECKS[key](settings[key]):
                defaulted_values.add(key)
                settings[key] = default

        # The egg's tilt (egg_d) must stay below its height (egg_b) or the curve's square root goes negative
        if settings["egg_d"] >= settings["egg_b"]:
            defaulted_values.update(("egg_b", "egg_d"))
            settings["egg_b"] = _SETTINGS_DEFAULTS["egg_b"]
            settings["egg_d"] = _SETTINGS_DEFAULTS["egg_d"]

        if defaulted_values:
            log.warning(f"Loaded settings from '{SETTINGS_PATH}', but with missing or invalid values that were "
                        f"defaulted: {', '.join(sorted(defaulted_values))}")
        else:
            log.info(f"Successfully loaded settings from '{SETTINGS_PATH}'.")
        return settings
    # Fall back to defaults in case of error, but warn in log
    except (FileNotFoundError, json.JSONDecodeError, OSError, TypeError):
        log.warning("Ran into an error while trying to load settings.json, falling back to defaults.",exc_info=True)
        return build_default_settings()

# Write the given settings to SETTINGS_PATH.
def save_settings(settings):
    with open(SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)
    log.info(f"Successfully saved settings to '{SETTINGS_PATH}'")

#endregion === Saving and Loading Settings ===
