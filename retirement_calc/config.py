from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from retirement_calc.core.profile import Profile
from retirement_calc.core.projection import WITHDRAWAL_RATE

DEFAULT_CONFIG_PATH = "config.yaml"

DEFAULT_PROFILE: Dict[str, Any] = {
    # Core timeline
    "currentAge": 47,
    "retirementAge": 67,
    # Investment strategy
    "currentSavings": 0,
    "monthlyInvestment": 250,
    "investmentReturn": 7,  # percent
    # Windfall, $0 means none
    "windfallAmount": 10000,
    "windfallEndYear": 2030,
    # Living expenses (monthly)
    "rent": 1200,
    "otherExpenses": 800,
    "expenseInflation": 3,  # percent
}

DEFAULT_CORS_ORIGINS: Tuple[str, ...] = (
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
)


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Settings:
    env: str = "dev"
    log_level: str = "INFO"
    withdrawal_rate: float = WITHDRAWAL_RATE
    cors_origins: Tuple[str, ...] = DEFAULT_CORS_ORIGINS
    profile_defaults: Dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_PROFILE))

    def default_profile(self) -> Profile:
        return Profile.model_validate(self.profile_defaults)


def _deep_get(d: Dict[str, Any], path: str, default=None):
    cur = d
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur


def _env_or_cfg(cfg: Dict[str, Any], key: str, cfg_path: str, default):
    # empty env vars count as unset
    v = os.getenv(key)
    if v is None or v.strip() == "":
        return _deep_get(cfg, cfg_path, default)
    return v.strip()


def _read_yaml(config_path: str) -> Dict[str, Any]:
    if not os.path.exists(config_path):
        return {}
    with open(config_path, "r", encoding="utf-8") as f:
        try:
            cfg = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"could not parse {config_path}: {exc}") from exc
    if not isinstance(cfg, dict):
        raise ConfigError(f"{config_path} must contain a mapping at the top level")
    return cfg


def load_settings(config_path: Optional[str] = None) -> Settings:
    """
    Loads config.yaml + overrides from .env/environment variables.

    The YAML `profile:` section overrides individual default profile
    fields by their camelCase names.
    """
    load_dotenv()  # loads .env into env vars

    if config_path is None:
        config_path = os.getenv("RETIREMENT_CALC_CONFIG") or DEFAULT_CONFIG_PATH
    cfg = _read_yaml(config_path)

    env = _env_or_cfg(cfg, "APP_ENV", "app.env", "dev")
    log_level = str(_env_or_cfg(cfg, "LOG_LEVEL", "app.log_level", "INFO")).upper()

    try:
        withdrawal_rate = float(
            _env_or_cfg(cfg, "WITHDRAWAL_RATE", "calculator.withdrawal_rate", WITHDRAWAL_RATE)
        )
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"withdrawal rate must be a number: {exc}") from exc
    if not 0 < withdrawal_rate <= 1:
        raise ConfigError("withdrawal rate must be in (0, 1]")

    origins = _env_or_cfg(cfg, "CORS_ORIGINS", "api.cors_origins", DEFAULT_CORS_ORIGINS)
    if isinstance(origins, str):
        origins = [o.strip() for o in origins.split(",") if o.strip()]
    cors_origins = tuple(origins)

    overrides = _deep_get(cfg, "profile", {}) or {}
    if not isinstance(overrides, dict):
        raise ConfigError("profile section must be a mapping")
    unknown = sorted(set(overrides) - set(Profile.model_fields))
    if unknown:
        raise ConfigError(f"unknown profile fields: {', '.join(unknown)}")

    profile_defaults = {**DEFAULT_PROFILE, **overrides}
    try:
        Profile.model_validate(profile_defaults)
    except ValidationError as exc:
        raise ConfigError(f"invalid default profile: {exc}") from exc

    return Settings(
        env=env,
        log_level=log_level,
        withdrawal_rate=withdrawal_rate,
        cors_origins=cors_origins,
        profile_defaults=profile_defaults,
    )


__all__ = [
    "DEFAULT_PROFILE",
    "DEFAULT_CORS_ORIGINS",
    "ConfigError",
    "Settings",
    "load_settings",
]
