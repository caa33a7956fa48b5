from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Mapping

# =========================== Config / Defaults ================================
CONF_FILE = Path(os.environ.get("BRAMBLE_CONF", "bramble.conf"))   # KEY=VALUE, e.g. MAX_EXAMPLES=200
DEFAULT_MAX_EXAMPLES = 100
DEFAULT_SEED = 0xC0FFEE
DEFAULT_MAX_SHRINKS = 1000

_ENV_OVERRIDES = {
    "MAX_EXAMPLES": "BRAMBLE_MAX_EXAMPLES",
    "SEED": "BRAMBLE_SEED",
    "MAX_SHRINKS": "BRAMBLE_MAX_SHRINKS",
}

# Module-level configuration cache; populated via _apply_conf()
CONF: Dict[str, str] = {}
MAX_EXAMPLES = DEFAULT_MAX_EXAMPLES
SEED = DEFAULT_SEED
MAX_SHRINKS = DEFAULT_MAX_SHRINKS


def load_conf(path: Path) -> Dict[str, str]:
    if not path.exists():
        return {}
    out: Dict[str, str] = {}
    for ln in path.read_text(encoding="utf-8").splitlines():
        ln = ln.strip()
        if not ln or ln.startswith("#"):
            continue
        if "=" in ln:
            k, v = ln.split("=", 1)
            out[k.strip()] = v.strip()
    return out


def _env_conf() -> Dict[str, str]:
    out: Dict[str, str] = {}
    for key, env_name in _ENV_OVERRIDES.items():
        val = os.environ.get(env_name)
        if val is not None:
            out[key] = val
    return out


def _get_int(key: str, default: int, minimum: int) -> int:
    raw = CONF.get(key)
    if raw is None:
        return default
    try:
        val = int(raw, 0)
    except ValueError:
        logging.warning("Invalid %s %r; using default %d", key, raw, default)
        return default
    if val < minimum:
        logging.warning("%s must be >= %d, got %d; using default %d", key, minimum, val, default)
        return default
    return val


def _apply_conf(conf: Mapping[str, str]) -> None:
    global CONF, MAX_EXAMPLES, SEED, MAX_SHRINKS

    CONF = dict(conf)
    MAX_EXAMPLES = _get_int("MAX_EXAMPLES", DEFAULT_MAX_EXAMPLES, 1)
    SEED = _get_int("SEED", DEFAULT_SEED, 0)
    # 0 disables the bound.
    MAX_SHRINKS = _get_int("MAX_SHRINKS", DEFAULT_MAX_SHRINKS, 0)

    for key in CONF:
        if key not in _ENV_OVERRIDES:
            logging.warning("Ignoring unknown config key %r", key)


def reload(path: Path | None = None) -> None:
    """Re-read the config file and environment overrides."""

    conf = load_conf(path or CONF_FILE)
    conf.update(_env_conf())
    _apply_conf(conf)


reload()
