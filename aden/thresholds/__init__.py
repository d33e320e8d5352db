# ==============================================
# TOPIC 1: Thresholds
# ==============================================
#
# Resolve the numeric thresholds every analysis stage reads.
#
# Modules:
# --------
# - migration_thresholds.py → MigrationThresholds (frozen), THRESHOLD_FIELDS
# - profiles.py             → Built-in profiles and profile help
# - resolver.py             → ThresholdResolver (defaults → profile → files → env → CLI)
#
# ==============================================

from .migration_thresholds import MigrationThresholds, ThresholdField, THRESHOLD_FIELDS
from .profiles import (
    MigrationProfile,
    PROFILES,
    find_profile,
    available_profiles,
    profile_help,
    suggest_profiles,
)
from .resolver import (
    ThresholdResolver,
    split_threshold_args,
    default_config_paths,
    threshold_help,
    generate_config_file,
)

__all__ = [
    "MigrationThresholds",
    "ThresholdField",
    "THRESHOLD_FIELDS",
    "MigrationProfile",
    "PROFILES",
    "find_profile",
    "available_profiles",
    "profile_help",
    "suggest_profiles",
    "ThresholdResolver",
    "split_threshold_args",
    "default_config_paths",
    "threshold_help",
    "generate_config_file",
]
