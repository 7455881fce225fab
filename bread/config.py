"""
Project configuration: version, API.Bible endpoint, translations, run settings.

Everything a batch run needs is resolved once into a frozen RunConfig and
passed down explicitly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from .paths import PASSAGES_DIR, translation_dir

__version__ = "0.3.0"

API_BASE = "https://rest.api.bible/v1"
API_KEY_ENV = "API_BIBLE_KEY"

# Translation short name -> API.Bible bible id
BIBLE_IDS: Dict[str, str] = {
    "niv": "78a9f6124f344018-01",
    "msg": "6f11a7de016f942e-01",
}

DEFAULT_TRANSLATION = "niv"

# Pause after each successful fetch: ~2 requests per second
DEFAULT_DELAY = 0.5


class ConfigError(Exception):
    """Fatal configuration problem (missing credential, unknown translation)."""


@dataclass(frozen=True)
class RunConfig:
    """
    Immutable settings for one batch run.

    api_key    : API.Bible credential
    translation: short translation name (e.g. 'niv')
    bible_id   : API.Bible id for that translation
    out_dir    : directory receiving <date>.json files
    delay      : seconds to sleep after each successful fetch
    timeout    : per-request timeout in seconds (None = transport default)
    """
    api_key: str
    translation: str
    bible_id: str
    out_dir: Path
    delay: float = DEFAULT_DELAY
    timeout: Optional[float] = None

    @property
    def base_url(self) -> str:
        return f"{API_BASE}/bibles/{self.bible_id}"


def resolve_api_key(key_arg: Optional[str]) -> str:
    """Resolve the API key from CLI arg or environment variable."""
    if key_arg:
        return key_arg
    env = os.getenv(API_KEY_ENV, "")
    if env:
        return env
    raise ConfigError(
        f"Missing {API_KEY_ENV} environment variable.\n"
        f"Usage: {API_KEY_ENV}=your-key python passages.py fetch [translation]"
    )


def resolve_translation(name: Optional[str]) -> str:
    """Normalize a translation name and check it against BIBLE_IDS."""
    translation = (name or DEFAULT_TRANSLATION).lower()
    if translation not in BIBLE_IDS:
        raise ConfigError(
            f'Unknown translation: "{translation}". '
            f"Available: {', '.join(BIBLE_IDS)}"
        )
    return translation


def build_run_config(
    translation: Optional[str] = None,
    api_key: Optional[str] = None,
    passages_dir: Optional[Path] = None,
    delay: float = DEFAULT_DELAY,
    timeout: Optional[float] = None,
) -> RunConfig:
    """
    Build a RunConfig, raising ConfigError before any processing happens.

    The translation is checked before the key so an unknown name is reported
    even when no key is set.
    """
    translation = resolve_translation(translation)
    key = resolve_api_key(api_key)
    if delay < 0:
        raise ConfigError(f"Delay must be >= 0 (got {delay})")

    return RunConfig(
        api_key=key,
        translation=translation,
        bible_id=BIBLE_IDS[translation],
        out_dir=translation_dir(passages_dir or PASSAGES_DIR, translation),
        delay=delay,
        timeout=timeout,
    )
