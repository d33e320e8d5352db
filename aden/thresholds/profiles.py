# ==============================================
# Migration Profiles
# ==============================================
#
# PURPOSE:
#   Named bundles of threshold multipliers, tuned for an application
#   scale ("startup-aggressive") or industry ("financial"). A profile
#   turns into a partial patch of MigrationThresholds fields that the
#   resolver layers on top of the built-in defaults.
#
# HOW A PROFILE BECOMES THRESHOLDS:
#   Derived field = round_half_up(base * multiplier)
#
#     high_frequency_threshold            50   × frequency
#     medium_frequency_threshold          20   × frequency
#     complex_query_requirement            5   × frequency
#     production_co_access_threshold     500   × frequency
#     high_production_execution_threshold 1000 × frequency
#     complex_relationship_penalty        10   × complexity
#     complexity_penalty_multiplier       = complexity
#     high_read_write_ratio             10.0   × read/write  (kept as float)
#     minimum_migration_score             = fair tier
#
#   Then the profile's own overrides win over the derived values.
#
# FUNCTIONS:
# ----------
# - find_profile(name) -> MigrationProfile     (case-insensitive, raises ConfigurationError)
# - available_profiles() -> str                → "conservative, balanced, ..."
# - profile_help() -> str                      → grouped help text
# - suggest_profiles(entity_count, pattern_count, max_frequency) -> str
#
# ==============================================

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Tuple

from ..errors import ConfigurationError

# --- Base constants the multipliers scale ---
BASE_HIGH_FREQUENCY = 50
BASE_MEDIUM_FREQUENCY = 20
BASE_READ_WRITE_RATIO = 10.0
BASE_COMPLEX_PENALTY = 10
BASE_COMPLEX_QUERIES = 5
BASE_CO_ACCESS = 500
BASE_PRODUCTION_EXECUTIONS = 1000

GENERAL_PURPOSE = "General Purpose"
SCALE_BASED = "Scale-Based"
INDUSTRY_SPECIFIC = "Industry-Specific"


def round_half_up(value: float) -> int:
    """Round in decimal so that 5 * 0.7 becomes 4 (not 3 from binary 3.4999...)."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def scale(base: int, multiplier: float) -> int:
    return round_half_up(Decimal(str(base)) * Decimal(str(multiplier)))


@dataclass(frozen=True)
class MigrationProfile:
    """
    A named threshold preset.

    Tier boundaries are absolute; everything else is a multiplier on
    the base constants above.
    """
    name: str
    description: str
    group: str
    frequency_multiplier: float
    complexity_multiplier: float
    read_write_multiplier: float
    tiers: Tuple[int, int, int, int]  # excellent, strong, good, fair
    overrides: Dict[str, Any] = field(default_factory=dict)

    def threshold_patch(self) -> Dict[str, Any]:
        """
        Compute the MigrationThresholds fields this profile sets.

        Returns:
            Partial mapping of field name → value, ready for
            dataclasses.replace
        """
        f = self.frequency_multiplier
        c = self.complexity_multiplier
        excellent, strong, good, fair = self.tiers

        patch = {
            "high_frequency_threshold": scale(BASE_HIGH_FREQUENCY, f),
            "medium_frequency_threshold": scale(BASE_MEDIUM_FREQUENCY, f),
            "high_read_write_ratio": float(Decimal(str(BASE_READ_WRITE_RATIO)) * Decimal(str(self.read_write_multiplier))),
            "complex_relationship_penalty": scale(BASE_COMPLEX_PENALTY, c),
            "complexity_penalty_multiplier": c,
            "minimum_migration_score": fair,
            "excellent_candidate_threshold": excellent,
            "strong_candidate_threshold": strong,
            "good_candidate_threshold": good,
            "fair_candidate_threshold": fair,
            "complex_query_requirement": scale(BASE_COMPLEX_QUERIES, f),
            "production_co_access_threshold": scale(BASE_CO_ACCESS, f),
            "high_production_execution_threshold": scale(BASE_PRODUCTION_EXECUTIONS, f),
            "profile_name": self.name,
            "profile_description": self.description,
        }
        patch.update(self.overrides)
        return patch


PROFILES: List[MigrationProfile] = [
    # --- General purpose ---
    MigrationProfile("conservative", "Conservative approach - only migrate obvious candidates",
                     GENERAL_PURPOSE, 2.0, 0.5, 2.0, (180, 120, 80, 50)),
    MigrationProfile("balanced", "Balanced approach - default settings for most applications",
                     GENERAL_PURPOSE, 1.0, 1.0, 1.0, (150, 100, 60, 30)),
    MigrationProfile("aggressive", "Aggressive approach - identify more migration opportunities",
                     GENERAL_PURPOSE, 0.4, 1.5, 0.7, (120, 80, 40, 20)),
    MigrationProfile("discovery", "Discovery mode - find all potential patterns",
                     GENERAL_PURPOSE, 0.2, 2.0, 0.5, (100, 60, 30, 10)),

    # --- Scale based ---
    MigrationProfile("startup-aggressive", "Optimized for small applications with growth potential",
                     SCALE_BASED, 0.3, 1.8, 0.6, (100, 60, 30, 15)),
    MigrationProfile("smb-balanced", "Balanced approach for small-to-medium business applications",
                     SCALE_BASED, 0.6, 1.2, 0.8, (130, 85, 50, 25)),
    MigrationProfile("enterprise-conservative", "Conservative approach for large enterprise systems",
                     SCALE_BASED, 1.8, 0.8, 1.5, (200, 150, 100, 60)),

    # --- Industry specific ---
    MigrationProfile("retail", "Optimized for retail/e-commerce patterns with seasonal spikes",
                     INDUSTRY_SPECIFIC, 0.7, 1.3, 0.6, (140, 90, 50, 25),
                     {"high_read_write_ratio": 5.0, "complex_query_requirement": 3}),
    MigrationProfile("healthcare", "Conservative approach for healthcare systems with complex relationships",
                     INDUSTRY_SPECIFIC, 1.2, 0.9, 1.8, (160, 110, 70, 40),
                     {"complexity_penalty_multiplier": 1.5, "minimum_migration_score": 40}),
    MigrationProfile("manufacturing", "Handles complex ERP patterns with many-to-many relationships",
                     INDUSTRY_SPECIFIC, 0.8, 1.1, 1.2, (130, 85, 50, 30),
                     {"complex_relationship_penalty": 5, "complex_query_requirement": 4}),
    MigrationProfile("financial", "Conservative approach for financial systems with regulatory requirements",
                     INDUSTRY_SPECIFIC, 2.5, 0.7, 2.0, (200, 140, 90, 60),
                     {"high_read_write_ratio": 15.0, "minimum_migration_score": 60}),
]


def available_profiles() -> str:
    """Comma-separated profile names, in declaration order."""
    return ", ".join(p.name for p in PROFILES)


def find_profile(name: str) -> MigrationProfile:
    """
    Look up a profile by name (case-insensitive).

    Raises:
        ConfigurationError: if no profile has that name
    """
    wanted = (name or "").strip().lower()
    for profile in PROFILES:
        if profile.name == wanted:
            return profile
    raise ConfigurationError(
        f"Unknown migration profile: {name}. Available profiles: {available_profiles()}"
    )


def profile_help() -> str:
    lines = ["Available Migration Profiles:", ""]
    for group in (GENERAL_PURPOSE, SCALE_BASED, INDUSTRY_SPECIFIC):
        lines.append(f"=== {group} ===")
        for profile in PROFILES:
            if profile.group == group:
                lines.append(f"  {profile.name:<24} {profile.description}")
        lines.append("")
    lines.append("Use --profile <name> to select a profile, or 'aden thresholds' for threshold options.")
    return "\n".join(lines) + "\n"


def suggest_profiles(entity_count: int, pattern_count: int, max_frequency: int) -> str:
    """Suggest profiles that fit the size and query volume of an application."""
    lines = ["Profile suggestions based on your application:"]

    if entity_count <= 5:
        lines.append("  - startup-aggressive: Good for small applications")
        lines.append("  - discovery: Find all patterns in small codebases")
    elif entity_count <= 20:
        lines.append("  - smb-balanced: Balanced approach for medium applications")
        lines.append("  - balanced: Default choice for most applications")
    else:
        lines.append("  - enterprise-conservative: Focus on high-impact migrations")
        lines.append("  - conservative: Only migrate obvious candidates")

    if max_frequency < 10:
        lines.append("  - aggressive: Your low frequencies suggest aggressive thresholds")
    if pattern_count > 50:
        lines.append("  - conservative: Many patterns detected, focus on best candidates")

    return "\n".join(lines) + "\n"
