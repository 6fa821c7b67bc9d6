"""
Settings for cursor pagination.

Plain attributes, no pydantic-settings: each value comes from a keyword
argument, then the environment, then a ``.env`` file in the working
directory, then its default. Environment names match case-insensitively.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional, Tuple

DEFAULT_PROFILE_URL = "https://jsonapi.org/profiles/ethanresnick/cursor-pagination/"


def read_env_file(path: Path) -> Dict[str, str]:
    """Read ``KEY=value`` lines, skipping blanks and comments; keys lower-cased."""
    if not path.is_file():
        return {}
    values = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        values[key.strip().lower()] = value.strip().strip("\"'")
    return values


class PaginationSettings:
    """Settings for cursor-based pagination.

    Attributes:
        pagination_profile_url: Base URI of the cursor pagination profile,
            used for error ``links.type`` URIs
        pagination_log_level: Log level, also read from ``LOG_LEVEL``
        pagination_log_format: ``json`` or ``text``, also read from ``LOG_FORMAT``
    """

    env_file = ".env"

    # name -> (default, environment names checked before NAME itself)
    fields: Dict[str, Tuple[str, Tuple[str, ...]]] = {
        "pagination_profile_url": (DEFAULT_PROFILE_URL, ()),
        "pagination_log_level": ("INFO", ("LOG_LEVEL",)),
        "pagination_log_format": ("json", ("LOG_FORMAT",)),
    }

    pagination_profile_url: str
    pagination_log_level: str
    pagination_log_format: str

    def __init__(self, **overrides: str) -> None:
        unknown = set(overrides) - set(self.fields)
        if unknown:
            raise TypeError(f"Unknown pagination settings: {sorted(unknown)}")

        environ = {key.lower(): value for key, value in os.environ.items()}
        file_values = read_env_file(Path(self.env_file))

        for name, (default, aliases) in self.fields.items():
            if name in overrides:
                value = overrides[name]
            else:
                found = _first_defined((*aliases, name), environ, file_values)
                value = default if found is None else found
            setattr(self, name, value)


def _first_defined(names: Tuple[str, ...], *sources: Dict[str, str]) -> Optional[str]:
    for source in sources:
        for name in names:
            if name.lower() in source:
                return source[name.lower()]
    return None


@lru_cache()
def get_settings() -> PaginationSettings:
    """Return the process-wide pagination settings."""
    return PaginationSettings()


def reset_settings() -> None:
    """Drop cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()
