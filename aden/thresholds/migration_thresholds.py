# ==============================================
# MigrationThresholds (Data Class)
# ==============================================
#
# PURPOSE:
#   The single, resolved set of numeric knobs that every analysis
#   stage reads. Built once per run by the ThresholdResolver and
#   never mutated afterwards (frozen dataclass).
#
# WHY THIS FILE EXISTS:
#   Thresholds are opinions, not correctness constraints. Keeping
#   them in one immutable value lets the resolver layer partial
#   patches (profile → files → env → CLI) on top of defaults with
#   dataclasses.replace, and lets the classifier stay stateless.
#
# CLASSES:
# --------
# - MigrationThresholds (frozen dataclass)
#     Frequency, read/write, complexity, tier and production knobs.
#
#     Methods:
#     --------
#     - validate() -> list[str]              → non-fatal consistency warnings
#     - configuration_summary() -> str       → one-line summary for logs
#     - candidate_priority(score) -> str     → profile-relative tier label
#     - suggest_adjustments(...) -> list[str]
#     - to_dict() -> dict
#
# - ThresholdField
#     Describes how one field is spelled in JSON files, environment
#     variables and CLI flags. THRESHOLD_FIELDS lists every tunable.
#
# ==============================================

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Type

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MigrationThresholds:
    """
    Resolved thresholds for one analysis run.

    Defaults match the "balanced" profile.
    """

    # --- Frequency thresholds ---
    high_frequency_threshold: int = 50
    medium_frequency_threshold: int = 20

    # --- Complexity scoring ---
    complex_relationship_penalty: int = 10
    complexity_penalty_multiplier: float = 1.0

    # --- Read/write patterns ---
    high_read_write_ratio: float = 10.0

    # --- Candidate tiers ---
    minimum_migration_score: int = 30
    excellent_candidate_threshold: int = 150
    strong_candidate_threshold: int = 100
    good_candidate_threshold: int = 60
    fair_candidate_threshold: int = 30

    # --- Complex query requirement ---
    complex_query_requirement: int = 5

    # --- Production metrics ---
    production_co_access_threshold: int = 500
    high_production_execution_threshold: int = 1000

    # --- Profile information ---
    profile_name: str = "default"
    profile_description: str = "Default balanced thresholds"

    def validate(self) -> List[str]:
        """
        Check the thresholds for values that contradict each other.

        Violations are logged and returned; they never raise, since
        user-supplied thresholds are opinions rather than errors.

        Returns:
            List of warning messages (empty when consistent)
        """
        warnings = []

        if self.high_frequency_threshold <= self.medium_frequency_threshold:
            warnings.append(
                f"High frequency threshold ({self.high_frequency_threshold}) should be greater "
                f"than medium frequency threshold ({self.medium_frequency_threshold})"
            )
        if self.medium_frequency_threshold <= 0:
            warnings.append(
                f"Medium frequency threshold ({self.medium_frequency_threshold}) should be positive"
            )
        if self.high_read_write_ratio <= 1.0:
            warnings.append(
                f"High read/write ratio ({self.high_read_write_ratio}) should be greater than 1.0"
            )
        if self.excellent_candidate_threshold <= self.strong_candidate_threshold:
            warnings.append(
                f"Excellent candidate threshold ({self.excellent_candidate_threshold}) should be "
                f"greater than strong candidate threshold ({self.strong_candidate_threshold})"
            )
        if self.strong_candidate_threshold <= self.good_candidate_threshold:
            warnings.append(
                f"Strong candidate threshold ({self.strong_candidate_threshold}) should be "
                f"greater than good candidate threshold ({self.good_candidate_threshold})"
            )
        if self.good_candidate_threshold <= self.fair_candidate_threshold:
            warnings.append(
                f"Good candidate threshold ({self.good_candidate_threshold}) should be "
                f"greater than fair candidate threshold ({self.fair_candidate_threshold})"
            )
        if self.complexity_penalty_multiplier < 0:
            warnings.append(
                f"Complexity penalty multiplier ({self.complexity_penalty_multiplier}) "
                f"should not be negative"
            )

        for message in warnings:
            logger.warning(message)
        logger.debug("Using thresholds - %s", self.configuration_summary())
        return warnings

    def configuration_summary(self) -> str:
        """One-line description of the active configuration."""
        return (
            f"Profile: {self.profile_name} | High freq: {self.high_frequency_threshold} | "
            f"Medium freq: {self.medium_frequency_threshold} | "
            f"Read/Write: {self.high_read_write_ratio:.1f} | "
            f"Min score: {self.minimum_migration_score}"
        )

    def candidate_priority(self, score: int) -> str:
        """
        Label a score against this profile's own tier boundaries.

        Unlike the fixed interpretation on DenormalizationCandidate,
        this moves with the profile (a financial profile demands more).
        """
        if score >= self.excellent_candidate_threshold:
            return "excellent"
        if score >= self.strong_candidate_threshold:
            return "strong"
        if score >= self.good_candidate_threshold:
            return "good"
        if score >= self.fair_candidate_threshold:
            return "fair"
        return "reconsider"

    def suggest_adjustments(self, entity_count: int, pattern_count: int, max_frequency: int) -> List[str]:
        """
        Suggest a different profile when the application's shape does
        not fit the active thresholds.

        Args:
            entity_count: Number of entities being analyzed
            pattern_count: Number of query patterns observed
            max_frequency: Highest single pattern frequency

        Returns:
            Advisory messages (also logged)
        """
        logger.info(
            "Application characteristics: %d entities, %d query patterns, max frequency: %d",
            entity_count, pattern_count, max_frequency,
        )
        suggestions = []

        if pattern_count == 0:
            suggestions.append(
                "No query patterns detected. Ensure the application contains eager-loading queries"
            )
        elif max_frequency < self.medium_frequency_threshold:
            suggestions.append(
                f"Maximum query frequency ({max_frequency}) is below medium threshold "
                f"({self.medium_frequency_threshold}). Consider --profile=aggressive or lowering thresholds"
            )
        if entity_count < 5 and self.high_frequency_threshold > 20:
            suggestions.append(
                f"Small application detected ({entity_count} entities). "
                f"Consider --profile=startup-aggressive for better results"
            )
        if entity_count > 50 and self.high_frequency_threshold < 100:
            suggestions.append(
                f"Large application detected ({entity_count} entities). "
                f"Consider --profile=enterprise-conservative to focus on highest-impact migrations"
            )

        for message in suggestions:
            logger.info(message)
        return suggestions

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ThresholdField:
    """How one tunable field is spelled in each configuration source."""
    name: str
    type: Type
    json_key: str
    env_var: str
    cli_key: str


THRESHOLD_FIELDS: List[ThresholdField] = [
    ThresholdField("high_frequency_threshold", int, "highFrequencyThreshold",
                   "ADEN_HIGH_FREQUENCY_THRESHOLD", "high-frequency"),
    ThresholdField("medium_frequency_threshold", int, "mediumFrequencyThreshold",
                   "ADEN_MEDIUM_FREQUENCY_THRESHOLD", "medium-frequency"),
    ThresholdField("high_read_write_ratio", float, "highReadWriteRatio",
                   "ADEN_HIGH_READ_WRITE_RATIO", "read-write-ratio"),
    ThresholdField("complex_relationship_penalty", int, "complexRelationshipPenalty",
                   "ADEN_COMPLEX_RELATIONSHIP_PENALTY", "complex-penalty"),
    ThresholdField("complexity_penalty_multiplier", float, "complexityPenaltyMultiplier",
                   "ADEN_COMPLEXITY_PENALTY_MULTIPLIER", "complexity-multiplier"),
    ThresholdField("minimum_migration_score", int, "minimumMigrationScore",
                   "ADEN_MINIMUM_MIGRATION_SCORE", "min-score"),
    ThresholdField("excellent_candidate_threshold", int, "excellentCandidateThreshold",
                   "ADEN_EXCELLENT_CANDIDATE_THRESHOLD", "excellent"),
    ThresholdField("strong_candidate_threshold", int, "strongCandidateThreshold",
                   "ADEN_STRONG_CANDIDATE_THRESHOLD", "strong"),
    ThresholdField("good_candidate_threshold", int, "goodCandidateThreshold",
                   "ADEN_GOOD_CANDIDATE_THRESHOLD", "good"),
    ThresholdField("fair_candidate_threshold", int, "fairCandidateThreshold",
                   "ADEN_FAIR_CANDIDATE_THRESHOLD", "fair"),
    ThresholdField("complex_query_requirement", int, "complexQueryRequirement",
                   "ADEN_COMPLEX_QUERY_REQUIREMENT", "complex-queries"),
    ThresholdField("production_co_access_threshold", int, "productionCoAccessThreshold",
                   "ADEN_PRODUCTION_CO_ACCESS_THRESHOLD", "co-access"),
    ThresholdField("high_production_execution_threshold", int, "highProductionExecutionThreshold",
                   "ADEN_HIGH_PRODUCTION_EXECUTION_THRESHOLD", "production-executions"),
]
