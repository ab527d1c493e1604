"""Configuration management for google-dorker.

Locates and loads ``google_dorker.yaml`` (API key and search-engine ID pools
plus optional search defaults), with support for environment variable
overrides and CLI patching.
"""

from __future__ import annotations

import os
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

CONFIG_FILENAME = "google_dorker.yaml"
_ENV_PREFIX = "GOOGLE_DORKER__"


class ConfigError(Exception):
    """Raised when the configuration is missing, unreadable or invalid."""


class SearchSettings(BaseModel):
    """Per-run search knobs, built once at startup and handed to the orchestrator."""

    query: str = ""
    subdomains: bool = False
    concurrency: int = Field(default=10, ge=1)
    timeout: float = Field(default=300.0, gt=0)
    page_delay: float = Field(default=1.0, ge=0)
    request_timeout: float = Field(default=30.0, gt=0)
    proxy: Optional[str] = None


class Config(BaseModel):
    """Top-level google-dorker configuration."""

    model_config = ConfigDict(populate_by_name=True)

    google_api: List[str] = Field(default_factory=list, alias="Google-API")
    google_cse_id: List[str] = Field(default_factory=list, alias="Google-CSE-ID")
    search: SearchSettings = Field(default_factory=SearchSettings)


@dataclass(frozen=True)
class Credentials:
    """One API key and one CSE ID picked from the configured pools."""

    api_key: str
    cse_id: str


def config_locations(explicit: Optional[str] = None) -> List[Path]:
    """Return the candidate config paths in lookup order.

    Args:
        explicit: A user-supplied path; when given it is the only candidate.
    """
    if explicit:
        return [Path(explicit)]
    return [
        Path(CONFIG_FILENAME),
        Path.home() / ".config" / CONFIG_FILENAME,
        Path("/etc") / CONFIG_FILENAME,
    ]


def find_config(explicit: Optional[str] = None) -> Path:
    """Return the absolute path of the first existing config file.

    Raises:
        ConfigError: If none of the candidate locations exists.
    """
    locations = config_locations(explicit)
    for location in locations:
        if location.is_file():
            return location.resolve()
    checked = "\n".join(f"- {loc}" for loc in locations)
    raise ConfigError(f"Config file not found. Checked locations:\n{checked}")


def load_config(config_path: Optional[str] = None) -> Config:
    """Load and validate the configuration.

    Args:
        config_path: Optional path to a YAML configuration file. Defaults to
                     the standard lookup locations.

    Returns:
        Populated :class:`Config` instance with non-empty credential pools.

    Raises:
        ConfigError: On any discovery, read, parse or validation failure.
    """
    path = find_config(config_path)

    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}
    except OSError as exc:
        raise ConfigError(f"Failed to read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse config file {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"Failed to parse config file {path}: expected a mapping")

    _apply_env_overrides(raw)

    try:
        config = Config.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config file {path}: {exc}") from exc

    if not config.google_api or not config.google_cse_id:
        raise ConfigError("Google API key or CSE ID missing from config")
    return config


def _apply_env_overrides(raw: Dict[str, Any]) -> None:
    """Mutate *raw* in-place with values from environment variables.

    ``GOOGLE_DORKER__GOOGLE_API`` and ``GOOGLE_DORKER__GOOGLE_CSE_ID`` take
    comma-separated pools; ``GOOGLE_DORKER__SEARCH__<FIELD>`` sets one search
    default, e.g. ``GOOGLE_DORKER__SEARCH__CONCURRENCY=20``.
    """
    pools = {"google_api": "Google-API", "google_cse_id": "Google-CSE-ID"}
    for env_key, env_val in os.environ.items():
        if not env_key.startswith(_ENV_PREFIX):
            continue
        parts = env_key[len(_ENV_PREFIX):].lower().split("__")
        if len(parts) == 1 and parts[0] in pools:
            raw[pools[parts[0]]] = [v.strip() for v in env_val.split(",") if v.strip()]
        elif len(parts) == 2 and parts[0] == "search":
            section = raw.get("search")
            if not isinstance(section, dict):
                section = raw["search"] = {}
            section[parts[1]] = env_val


def select_credentials(
    config: Config,
    choose: Callable[[Sequence[str]], str] = random.choice,
) -> Credentials:
    """Pick one API key and one CSE ID from the configured pools.

    Args:
        config: Loaded configuration.
        choose: Selection function; defaults to a uniform random pick.

    Raises:
        ConfigError: If either pool is empty.
    """
    if not config.google_api or not config.google_cse_id:
        raise ConfigError("Google API key or CSE ID missing from config")
    return Credentials(api_key=choose(config.google_api), cse_id=choose(config.google_cse_id))
