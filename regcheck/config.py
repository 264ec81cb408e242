"""
Runtime settings.

Usage:
    from regcheck.config import load_settings

    settings = load_settings()

Values come from the environment after a `.env` file in the working
directory (if any) has been loaded:

    REGCHECK_DOCUMENTS_PATH        JSON document store path
    REGCHECK_CANDIDATE_LIMIT       candidates fetched per query (20)
    REGCHECK_TOP_K                 citations kept per query (5)
    REGCHECK_PRIMARY_JURISDICTION  default jurisdiction hint
    REGCHECK_LOG_LEVEL             logging level name (INFO)
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from .exceptions import ConfigurationError


ENV_PREFIX = "REGCHECK_"


@dataclass(frozen=True)
class Settings:
    """Pipeline settings."""

    documents_path: Optional[str] = None
    candidate_limit: int = 20
    top_k: int = 5
    primary_jurisdiction: Optional[str] = None
    log_level: str = "INFO"

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'documents_path': self.documents_path,
            'candidate_limit': self.candidate_limit,
            'top_k': self.top_k,
            'primary_jurisdiction': self.primary_jurisdiction,
            'log_level': self.log_level
        }


def _get_str(env: Mapping[str, str], name: str) -> Optional[str]:
    value = env.get(ENV_PREFIX + name, "").strip()
    return value or None


def _get_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = _get_str(env, name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(
            f"{ENV_PREFIX}{name} must be an integer, got {raw!r}"
        ) from None
    if value < 1:
        raise ConfigurationError(f"{ENV_PREFIX}{name} must be at least 1, got {value}")
    return value


def load_settings(
    env: Optional[Mapping[str, str]] = None,
    dotenv_path: Optional[str] = None
) -> Settings:
    """
    Load settings from the environment.

    Args:
        env: Mapping to read instead of os.environ; no .env file is loaded
            when given
        dotenv_path: Explicit .env file; the working directory is searched
            if None

    Returns:
        Settings

    Raises:
        ConfigurationError: If a numeric setting is not a positive integer
    """
    if env is None:
        load_dotenv(dotenv_path or find_dotenv(usecwd=True))
        env = os.environ

    return Settings(
        documents_path=_get_str(env, "DOCUMENTS_PATH"),
        candidate_limit=_get_int(env, "CANDIDATE_LIMIT", Settings.candidate_limit),
        top_k=_get_int(env, "TOP_K", Settings.top_k),
        primary_jurisdiction=_get_str(env, "PRIMARY_JURISDICTION"),
        log_level=(_get_str(env, "LOG_LEVEL") or Settings.log_level).upper(),
    )
