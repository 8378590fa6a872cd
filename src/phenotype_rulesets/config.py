"""SDK configuration — reads settings from environment variables.

All settings have sensible defaults for local use.  Values are read once
by :func:`load_settings`; nothing in the SDK reads the environment lazily.
"""

import os
from dataclasses import dataclass

from phenotype_rulesets.constants import DEFAULT_CHART_SIZE


@dataclass(frozen=True)
class Settings:
    """Immutable configuration read from environment at startup."""

    # Ruleset directory (None → RulesetStore default, which is v1/ from repo root)
    ruleset_dir: str | None = None

    # Logging
    log_level: str = "INFO"

    # Radial chart canvas edge length in px
    chart_size: int = DEFAULT_CHART_SIZE


def load_settings() -> Settings:
    """Build settings from ``PHENOTYPE_*`` environment variables."""
    chart_size = int(os.getenv("PHENOTYPE_CHART_SIZE", str(DEFAULT_CHART_SIZE)))
    if chart_size <= 0:
        raise ValueError(f"PHENOTYPE_CHART_SIZE must be positive, got {chart_size}")

    return Settings(
        ruleset_dir=os.getenv("PHENOTYPE_RULESET_DIR") or None,
        log_level=os.getenv("PHENOTYPE_LOG_LEVEL", "INFO").upper(),
        chart_size=chart_size,
    )
