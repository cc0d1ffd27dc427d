"""
Configuration module for Idea Priority.

Loads environment variables from .env file and exposes them as typed configuration values.
Uses python-dotenv for loading and provides safe defaults where appropriate.

Scorer constants (weight bounds, staleness threshold, decay factor) are fixed
module constants rather than environment settings: the ranking contract
depends on them.
"""

import logging
import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file from project root
_project_root = Path(__file__).parent.parent.parent
_env_path = _project_root / ".env"
load_dotenv(_env_path)


# =============================================================================
# Application Environment
# =============================================================================

# Application environment: "development", "staging", or "production"
APP_ENV: str = os.getenv("APP_ENV", "development")

# Enable debug mode for verbose logging
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"


# =============================================================================
# Airtable Configuration
# =============================================================================

# Airtable API key; when empty the in-memory repositories are used
AIRTABLE_API_KEY: str = os.getenv("AIRTABLE_API_KEY", "")

# Airtable base ID holding the ideas, creators and opportunity score tables
AIRTABLE_BASE_ID: str = os.getenv("AIRTABLE_BASE_ID", "")

AIRTABLE_IDEAS_TABLE: str = os.getenv("AIRTABLE_IDEAS_TABLE", "Ideas")
AIRTABLE_CREATORS_TABLE: str = os.getenv("AIRTABLE_CREATORS_TABLE", "Creators")
AIRTABLE_SIGNALS_TABLE: str = os.getenv("AIRTABLE_SIGNALS_TABLE", "OpportunityScores")

# HTTP request timeout in seconds
REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "30"))


# =============================================================================
# Priority Scoring Constants
# =============================================================================

# Blend weight used when a creator has never set one
DEFAULT_PRIORITY_WEIGHT: int = 55

# Bounds for the vote share of the blend (percent)
MIN_PRIORITY_WEIGHT: int = 30
MAX_PRIORITY_WEIGHT: int = 70

# Opportunity signals older than this are decayed
STALE_AFTER_HOURS: int = 24

# Multiplier applied to a stale opportunity score
STALE_DECAY_FACTOR: float = 0.8


# =============================================================================
# Helper Functions
# =============================================================================

def is_production() -> bool:
    """Check if running in production environment."""
    return APP_ENV == "production"


def is_development() -> bool:
    """Check if running in development environment."""
    return APP_ENV == "development"


def validate_config() -> list[str]:
    """
    Validate that required configuration is present for production.

    Returns:
        List of missing or invalid configuration keys (empty if all valid).
    """
    errors = []

    if is_production():
        if not AIRTABLE_API_KEY:
            errors.append("AIRTABLE_API_KEY is required in production")
        if not AIRTABLE_BASE_ID:
            errors.append("AIRTABLE_BASE_ID is required in production")

    if REQUEST_TIMEOUT < 1:
        errors.append("REQUEST_TIMEOUT must be at least 1 second")

    if not (MIN_PRIORITY_WEIGHT <= DEFAULT_PRIORITY_WEIGHT <= MAX_PRIORITY_WEIGHT):
        errors.append("DEFAULT_PRIORITY_WEIGHT must lie within the weight bounds")

    return errors


def print_config_summary() -> None:
    """Print a summary of current configuration (safe for logs, no secrets)."""
    print(f"  APP_ENV: {APP_ENV}")
    print(f"  DEBUG: {DEBUG}")
    print(f"  AIRTABLE_API_KEY: {'***' if AIRTABLE_API_KEY else '(not set)'}")
    print(f"  AIRTABLE_BASE_ID: {'***' if AIRTABLE_BASE_ID else '(not set)'}")
    print(f"  AIRTABLE_IDEAS_TABLE: {AIRTABLE_IDEAS_TABLE}")
    print(f"  AIRTABLE_CREATORS_TABLE: {AIRTABLE_CREATORS_TABLE}")
    print(f"  AIRTABLE_SIGNALS_TABLE: {AIRTABLE_SIGNALS_TABLE}")
    print(f"  REQUEST_TIMEOUT: {REQUEST_TIMEOUT}s")
    print(f"  PRIORITY_WEIGHT: default {DEFAULT_PRIORITY_WEIGHT}, "
          f"range [{MIN_PRIORITY_WEIGHT}, {MAX_PRIORITY_WEIGHT}]")
    print(f"  STALENESS: after {STALE_AFTER_HOURS}h, decay x{STALE_DECAY_FACTOR}")


def configure_logging(verbose: bool = False) -> None:
    """Set up root logging; DEBUG level when verbose or DEBUG is enabled."""
    level = logging.DEBUG if (verbose or DEBUG) else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
