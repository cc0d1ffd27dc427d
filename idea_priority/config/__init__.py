"""
Configuration module.

Handles environment variables, Airtable settings and scoring constants.
"""

from idea_priority.config.config import (
    APP_ENV,
    DEBUG,
    AIRTABLE_API_KEY,
    AIRTABLE_BASE_ID,
    AIRTABLE_IDEAS_TABLE,
    AIRTABLE_CREATORS_TABLE,
    AIRTABLE_SIGNALS_TABLE,
    REQUEST_TIMEOUT,
    DEFAULT_PRIORITY_WEIGHT,
    MIN_PRIORITY_WEIGHT,
    MAX_PRIORITY_WEIGHT,
    STALE_AFTER_HOURS,
    STALE_DECAY_FACTOR,
    is_production,
    is_development,
    validate_config,
    print_config_summary,
    configure_logging,
)

__all__ = [
    "APP_ENV",
    "DEBUG",
    "AIRTABLE_API_KEY",
    "AIRTABLE_BASE_ID",
    "AIRTABLE_IDEAS_TABLE",
    "AIRTABLE_CREATORS_TABLE",
    "AIRTABLE_SIGNALS_TABLE",
    "REQUEST_TIMEOUT",
    "DEFAULT_PRIORITY_WEIGHT",
    "MIN_PRIORITY_WEIGHT",
    "MAX_PRIORITY_WEIGHT",
    "STALE_AFTER_HOURS",
    "STALE_DECAY_FACTOR",
    "is_production",
    "is_development",
    "validate_config",
    "print_config_summary",
    "configure_logging",
]
