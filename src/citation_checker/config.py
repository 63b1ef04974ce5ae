"""Runtime settings read from the environment or a ``.env`` file."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Tuple

from dotenv import load_dotenv

from .latex import DEFAULT_SUFFIX
from .queries import REQUIRED_ARTICLE_FIELDS

ENV_PREFIX = "CITATION_CHECKER_"


def parse_field_list(value: str) -> Tuple[str, ...]:
    """Split a comma separated field list, dropping blanks."""
    return tuple(part.strip().lower() for part in value.split(",") if part.strip())


@dataclass
class Settings:
    document: str = "document.tex"
    bibliography: str = "references.bib"
    default_suffix: str = DEFAULT_SUFFIX
    entry_type: str = "article"
    required_fields: Tuple[str, ...] = field(default=REQUIRED_ARTICLE_FIELDS)
    log_level: str = "WARNING"


def load_settings(env_file: str | None = None) -> Settings:
    """Build settings from ``CITATION_CHECKER_*`` variables, loading ``.env`` first."""

    load_dotenv(env_file)
    defaults = Settings()
    fields_value = os.getenv(f"{ENV_PREFIX}REQUIRED_FIELDS")
    return Settings(
        document=os.getenv(f"{ENV_PREFIX}DOCUMENT", defaults.document),
        bibliography=os.getenv(f"{ENV_PREFIX}BIBLIOGRAPHY", defaults.bibliography),
        default_suffix=os.getenv(f"{ENV_PREFIX}DEFAULT_SUFFIX", defaults.default_suffix),
        entry_type=os.getenv(f"{ENV_PREFIX}ENTRY_TYPE", defaults.entry_type).lower(),
        required_fields=(
            parse_field_list(fields_value) if fields_value else defaults.required_fields
        ),
        log_level=os.getenv(f"{ENV_PREFIX}LOG_LEVEL", defaults.log_level).upper(),
    )
