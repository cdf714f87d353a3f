from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Optional
import yaml

from .solver_core import ZooTilesError, animal_alphabet, constraints_for, Constraints

DEFAULT_CONFIG = Path(__file__).resolve().parents[1] / "configs" / "engine.yaml"

DEFAULTS = {
    "grid_size": 6,
    "difficulty": "Medium",
    "seed": None,
    "unique": False,
    "symbols": "animals",  # animals | letters | digits
}

class DotDict(dict):
    __getattr__ = dict.get
    __setattr__ = dict.__setitem__
    __delattr__ = dict.__delitem__

def load_yaml(path: str | Path) -> DotDict:
    """Engine settings from YAML; the top level must be a mapping of known keys."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ZooTilesError(f"{path}: expected a mapping of settings, got {type(data).__name__}")
    unknown = sorted(set(data) - set(DEFAULTS))
    if unknown:
        raise ZooTilesError(f"{path}: unknown settings {unknown}; expected {sorted(DEFAULTS)}")
    return DotDict(data)

def merge_overrides(cfg: Dict[str, Any], **overrides) -> Dict[str, Any]:
    # unset CLI flags arrive as None and leave the file value in place
    cfg.update({k: v for k, v in overrides.items() if v is not None})
    return cfg

def load_engine_config(path: Optional[str | Path] = None, **overrides) -> DotDict:
    """Defaults <- YAML file (configs/engine.yaml unless `path`) <- non-None overrides."""
    cfg = DotDict(DEFAULTS)
    src = Path(path) if path is not None else DEFAULT_CONFIG
    if path is not None or src.exists():
        cfg.update(load_yaml(src))
    return merge_overrides(cfg, **overrides)

def symbol_alphabet(style: str, n: int) -> tuple[str, ...]:
    if style == "animals":
        return animal_alphabet(n)
    if style == "letters":
        return tuple(chr(ord("A") + i) for i in range(n))
    if style == "digits":
        # 10 and 12 run past 9, so keep them as multi-char strings
        return tuple(str(i + 1) for i in range(n))
    raise ZooTilesError(f"unknown symbol style {style!r}")

def constraints_from_config(cfg: Dict[str, Any]) -> Constraints:
    size = int(cfg["grid_size"])
    return constraints_for(size, symbol_alphabet(cfg.get("symbols") or "animals", size))
