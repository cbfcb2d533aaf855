from __future__ import annotations
import os
import json
from dataclasses import dataclass, asdict, replace
from pathlib import Path
from typing import Any, Dict, Optional

from straitjacket.logging_setup import get_logger
from straitjacket.numeric import DEGENERATE_POLICIES, TIE_BREAKS

LOG = get_logger("config")

ENV_CONFIG_PATH = "STRAITJACKET_CONFIG"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


# ──────────────────────────────────────────────────────────────────────────────
# helpers: reading ENV/files and validating choices
# ──────────────────────────────────────────────────────────────────────────────
def _as_choice(name: str, raw: Any, default: str, allowed: tuple) -> str:
    if raw is None:
        return default
    value = str(raw).strip().lower()
    if value in allowed:
        return value
    LOG.warning("Ignoring %s=%r, expected one of %s; using %r", name, raw, allowed, default)
    return default


def _as_bool(name: str, raw: Any, default: bool) -> bool:
    if raw is None:
        return default
    if isinstance(raw, bool):
        return raw
    value = str(raw).strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    LOG.warning("Ignoring %s=%r, expected a boolean; using %r", name, raw, default)
    return default


def _load_from_file(path: Path) -> Dict[str, Any]:
    """Read numeric.yaml/numeric.json and return a (possibly nested) dict."""
    if not path.exists():
        LOG.warning("Config file %s does not exist", path)
        return {}
    text = path.read_text(encoding="utf-8").strip()
    if not text:
        return {}
    if path.suffix in (".yaml", ".yml"):
        import yaml  # pyyaml
        data = yaml.safe_load(text)
    elif path.suffix == ".json":
        data = json.loads(text)
    else:
        LOG.warning("Unsupported config file type %s", path.suffix)
        return {}
    return data if isinstance(data, dict) else {}


def _get_nested(cfg: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return cfg[a][b]... if present, otherwise default."""
    cur = cfg
    for k in keys:
        if not isinstance(cur, dict) or k not in cur:
            return default
        cur = cur[k]
    return cur


def _from_file(cfg: Dict[str, Any], key: str) -> Any:
    value = _get_nested(cfg, key)
    if value is None:
        value = _get_nested(cfg, "numeric", key)
    return value


def _setting(cfg: Dict[str, Any], env_name: str, key: str) -> Any:
    """ENV value if set and non-blank, else the file value (or None)."""
    raw = os.getenv(env_name)
    if raw is not None and raw.strip():
        return raw
    return _from_file(cfg, key)


# ──────────────────────────────────────────────────────────────────────────────
# Config dataclass
# ──────────────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class NumericConfig:
    """
    Behaviour switches for the numeric helpers.
    The defaults are plain IEEE-754 behaviour with banker's rounding.
    """
    tie_break: str = "half_even"          # half_even | half_away
    on_degenerate: str = "propagate"      # propagate | raise
    clamp_map: bool = False               # clamp map_range output to the target range

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def validate(self) -> "NumericConfig":
        """
        Return a copy with unknown choices replaced by their defaults.
        """
        defaults = NumericConfig()
        return replace(
            self,
            tie_break=_as_choice("tie_break", self.tie_break, defaults.tie_break, TIE_BREAKS),
            on_degenerate=_as_choice(
                "on_degenerate", self.on_degenerate, defaults.on_degenerate, DEGENERATE_POLICIES
            ),
            clamp_map=_as_bool("clamp_map", self.clamp_map, defaults.clamp_map),
        )


DEFAULT_CONFIG = NumericConfig()


# ──────────────────────────────────────────────────────────────────────────────
# Loading: ENV → file → defaults (ENV wins). Nested keys are supported.
# ──────────────────────────────────────────────────────────────────────────────
def load_numeric_config(path: Optional[Path] = None) -> NumericConfig:
    """
    Load NumericConfig from ENV and (optionally) a YAML/JSON file.

    The file is `path` if given, otherwise the one named by STRAITJACKET_CONFIG.
    Two key styles are accepted in the file:
      1) Flat: tie_break: half_away
      2) Nested: numeric: { tie_break: half_away, on_degenerate: raise }

    Environment variables:
      STRAITJACKET_TIE_BREAK
      STRAITJACKET_ON_DEGENERATE
      STRAITJACKET_CLAMP_MAP
    """
    if path is None and os.getenv(ENV_CONFIG_PATH):
        path = Path(os.environ[ENV_CONFIG_PATH])
    file_cfg = _load_from_file(Path(path)) if path else {}

    defaults = DEFAULT_CONFIG
    tie_break = _setting(file_cfg, "STRAITJACKET_TIE_BREAK", "tie_break")
    on_degenerate = _setting(file_cfg, "STRAITJACKET_ON_DEGENERATE", "on_degenerate")
    clamp_map = _setting(file_cfg, "STRAITJACKET_CLAMP_MAP", "clamp_map")

    cfg = NumericConfig(
        tie_break=_as_choice("tie_break", tie_break, defaults.tie_break, TIE_BREAKS),
        on_degenerate=_as_choice(
            "on_degenerate", on_degenerate, defaults.on_degenerate, DEGENERATE_POLICIES
        ),
        clamp_map=_as_bool("clamp_map", clamp_map, defaults.clamp_map),
    )
    LOG.debug("Loaded numeric config: %s", cfg.to_dict())
    return cfg
