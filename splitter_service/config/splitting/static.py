"""
Split profiles from JSON: {"active": <name>, "profiles": {<name>: <SplitConfig fields>}}.
The bundled static.json is used unless SPLIT_PROFILES_PATH points elsewhere.
Profiles are parsed once per process.
"""

import json
from pathlib import Path
from typing import Any

from splitter_service.config.settings import get_settings
from splitter_service.config.splitting.models import SplitConfig

BUNDLED_PROFILES_PATH = Path(__file__).resolve().parent / "static.json"

_raw: dict | None = None
_profiles: dict[str, SplitConfig] | None = None


def profiles_path() -> Path:
    configured = get_settings().split_profiles_path
    return Path(configured) if configured else BUNDLED_PROFILES_PATH


def _load_raw_data() -> dict:
    global _raw
    if _raw is None:
        _raw = json.loads(profiles_path().read_text(encoding="utf-8"))
    return _raw


def reset_profile_cache() -> None:
    """Forget parsed profiles so the next lookup re-reads the file."""
    global _raw, _profiles
    _raw = None
    _profiles = None


def load_split_profiles() -> dict[str, SplitConfig]:
    """All profiles keyed by name. Raises InvalidConfig if a profile has inconsistent sizes."""
    global _profiles
    if _profiles is None:
        entries = _load_raw_data().get("profiles", {})
        _profiles = {name: SplitConfig.model_validate(fields) for name, fields in entries.items()}
    return _profiles


def get_split_config(profile_name: str) -> SplitConfig | None:
    return load_split_profiles().get(profile_name)


def get_active_profile_name() -> str:
    """Profile marked "active" in the file; "default" when unset."""
    return _load_raw_data().get("active", "default")


def resolve_split_config(profile_name: str, overrides: dict[str, Any] | None = None) -> SplitConfig:
    """
    Look up a profile ("active" follows the file's marker) and apply inline overrides on top.
    Raises ValueError for unknown profiles and InvalidConfig for inconsistent sizes.
    """
    name = get_active_profile_name() if profile_name == "active" else profile_name
    cfg = get_split_config(name)
    if cfg is None:
        raise ValueError(f"Unknown split profile: {profile_name!r}")
    if not overrides:
        return cfg
    return SplitConfig.model_validate({**cfg.model_dump(), **overrides})
