# ==============================================
# Classifier
# ==============================================
#
# PURPOSE:
#   Takes completed EntityUsageProfiles and applies scoring rules to
#   produce DenormalizationCandidates. This is the "brain": it decides
#   which entities are worth migrating, how hard that is, and which
#   datastore fits them.
#
# WHY THIS CLASS EXISTS:
#   Thresholds are opinions; counting is a contract. The classifier
#   only reads profiles and thresholds, so the same evidence always
#   produces the same score, and tuning happens in SCORE_WEIGHTS and
#   the resolved thresholds rather than in code.
#
# CLASS: Classifier
# -----------------
#   Stateless: takes profiles in, produces candidates out.
#
#   Constructor:
#   ------------
#   - __init__(thresholds: MigrationThresholds)
#
#   Methods:
#   --------
#   - classify_all(profiles, complexity) -> list[DenormalizationCandidate]
#       Score every profile; ordered by descending score, then name.
#
#   - classify(profile, profiles, complexity) -> DenormalizationCandidate | None
#       Applies rules in order:
#
#       RULE 1: EXCLUSION
#         eager < medium AND nothing always loaded AND no co-access
#         at or above the co-access threshold → None
#
#       RULE 2: SCORE (additive, each category capped)
#         eager loading       min(100, eager * 50 / high)
#         always loaded       min(30, 10 per entity)
#         read-heavy          20 when effective ratio >= threshold
#         complex queries     25 at the requirement, else min(20, 5 each)
#         simple key access   15 when every pattern is SINGLE_ENTITY
#         production volume   min(30, executions / 100)
#         production co-access min(20, 10 per entity >= threshold)
#         circular reference  - penalty * multiplier
#         many-to-many        - weight * penalty * multiplier (weight cap 2)
#         floored at 0
#
#       RULE 3: TARGET (topology, not score)
#         any many-to-many relationship      → NEPTUNE
#         <= 3 related, flat, high co-access → DYNAMODB
#         otherwise                          → DOCUMENTDB
#
# ==============================================

import logging
from typing import Dict, List, Optional, Tuple

from ..model import Cardinality, QueryType
from ..thresholds import MigrationThresholds
from ..thresholds.profiles import round_half_up
from .complexity import ComplexityScorer
from .decision import DenormalizationCandidate, NoSQLTarget
from .usage_profile import EntityUsageProfile

logger = logging.getLogger(__name__)


# Per-category weights and caps. Tunable policy, not contracts.
SCORE_WEIGHTS: Dict[str, int] = {
    "eager_loading_points_at_high": 50,
    "eager_loading_cap": 100,
    "always_loaded_each": 10,
    "always_loaded_cap": 30,
    "read_heavy": 20,
    "complex_queries_full": 25,
    "complex_query_each": 5,
    "complex_queries_partial_cap": 20,
    "simple_key_access": 15,
    "production_executions_per_point": 100,
    "production_executions_cap": 30,
    "co_access_each": 10,
    "co_access_cap": 20,
    "many_to_many_weight_cap": 2,
}

# How much each related-entity cardinality counts toward the
# relationship penalty.
CARDINALITY_PENALTY_WEIGHT: Dict[Cardinality, int] = {
    Cardinality.ONE_TO_ONE: 0,
    Cardinality.ONE_TO_MANY: 0,
    Cardinality.MANY_TO_ONE: 0,
    Cardinality.MANY_TO_MANY: 1,
}

FAN_OUT_CARDINALITIES = frozenset({Cardinality.ONE_TO_MANY, Cardinality.MANY_TO_ONE})
MAX_KEY_VALUE_RELATED = 3


class Classifier:
    """
    Scores usage profiles and produces denormalization candidates.
    """

    def __init__(self, thresholds: MigrationThresholds = None):
        """
        Args:
            thresholds: Optional MigrationThresholds. If not provided,
                        the balanced defaults are used.
        """
        self.thresholds = thresholds or MigrationThresholds()

    def classify_all(
        self,
        profiles: Dict[str, EntityUsageProfile],
        complexity: ComplexityScorer,
    ) -> List[DenormalizationCandidate]:
        """
        Classify every profile.

        Args:
            profiles: entity name → completed EntityUsageProfile
            complexity: Scorer used for each candidate's complexity tier

        Returns:
            Candidates ordered by descending score, ties by entity name
        """
        candidates = []
        for name in sorted(profiles):
            candidate = self.classify(profiles[name], profiles, complexity)
            if candidate is not None:
                candidates.append(candidate)

        candidates.sort(key=lambda c: (-c.score, c.primary_entity))
        logger.info("Identified %d denormalization candidates", len(candidates))
        return candidates

    def classify(
        self,
        profile: EntityUsageProfile,
        profiles: Dict[str, EntityUsageProfile],
        complexity: ComplexityScorer,
    ) -> Optional[DenormalizationCandidate]:
        if not self.is_candidate(profile):
            logger.debug("%s excluded: no eager loading, joins or co-access", profile.entity_name)
            return None

        related = self.related_entities(profile, profiles)
        complexity_score = complexity.entity_score(profile)
        score = self.score(profile)

        return DenormalizationCandidate(
            primary_entity=profile.entity_name,
            related_entities=related,
            score=score,
            recommended_target=self.select_target(profile, related),
            complexity=complexity.tier(profile),
            complexity_score=complexity_score,
            reason=self.reason(profile),
            priority=self.thresholds.candidate_priority(score),
        )

    # ======================================
    # Rule 1: exclusion
    # ======================================
    def high_co_access(self, profile: EntityUsageProfile) -> List[str]:
        """Entities co-accessed at or above the co-access threshold, sorted."""
        threshold = self.thresholds.production_co_access_threshold
        return sorted(name for name, count in profile.co_accessed_entities.items() if count >= threshold)

    def is_candidate(self, profile: EntityUsageProfile) -> bool:
        if profile.eager_loading_count >= self.thresholds.medium_frequency_threshold:
            return True
        if profile.always_loaded_with:
            return True
        return bool(self.high_co_access(profile))

    # ======================================
    # Rule 2: score
    # ======================================
    def effective_read_write(self, profile: EntityUsageProfile) -> Tuple[float, int]:
        """(ratio, reads) from production when it saw the entity, else from code."""
        production_ratio = profile.production_read_write_ratio
        if production_ratio is not None:
            return production_ratio, profile.production_read_count
        return profile.read_write_ratio, profile.read_count

    def score(self, profile: EntityUsageProfile) -> int:
        """
        Additive migration score for one profile.

        Returns:
            Score, floored at 0
        """
        t = self.thresholds
        w = SCORE_WEIGHTS
        score = 0

        # --- Eager loading ---
        if t.high_frequency_threshold > 0:
            eager_points = profile.eager_loading_count * w["eager_loading_points_at_high"] // t.high_frequency_threshold
        else:
            eager_points = w["eager_loading_cap"] if profile.eager_loading_count > 0 else 0
        score += min(w["eager_loading_cap"], eager_points)

        # --- Always loaded together ---
        score += min(w["always_loaded_cap"], w["always_loaded_each"] * len(profile.always_loaded_with))

        # --- Read-heavy ---
        ratio, reads = self.effective_read_write(profile)
        if reads > 0 and ratio >= t.high_read_write_ratio:
            score += w["read_heavy"]

        # --- Query complexity ---
        complex_queries = profile.complex_eager_pattern_count()
        if complex_queries >= t.complex_query_requirement:
            score += w["complex_queries_full"]
        else:
            score += min(w["complex_queries_partial_cap"], w["complex_query_each"] * complex_queries)

        # --- Simple key-based access ---
        if profile.query_patterns and all(
            p.query_type is QueryType.SINGLE_ENTITY for p in profile.query_patterns
        ):
            score += w["simple_key_access"]

        # --- Production metrics ---
        score += min(
            w["production_executions_cap"],
            profile.production_execution_count // w["production_executions_per_point"],
        )
        score += min(w["co_access_cap"], w["co_access_each"] * len(self.high_co_access(profile)))

        # --- Penalties ---
        penalty = t.complex_relationship_penalty * t.complexity_penalty_multiplier
        if profile.entity.has_circular_references:
            score -= round_half_up(penalty)

        weight = sum(CARDINALITY_PENALTY_WEIGHT[c] for c in profile.related_entities.values())
        weight = min(weight, w["many_to_many_weight_cap"])
        if weight:
            score -= round_half_up(weight * penalty)

        return max(score, 0)

    # ======================================
    # Rule 3: related entities and target
    # ======================================
    def related_entities(
        self,
        profile: EntityUsageProfile,
        profiles: Dict[str, EntityUsageProfile],
    ) -> Tuple[str, ...]:
        """
        Entities that would travel with this one in a single record.

        always_loaded_with, fused one-to-one partners, one-to-many /
        many-to-one partners that either side always loads, and
        entities co-accessed at or above the threshold.
        """
        name = profile.entity_name
        related = set(profile.always_loaded_with)

        for other, cardinality in profile.related_entities.items():
            if cardinality is Cardinality.ONE_TO_ONE:
                related.add(other)
            elif cardinality in FAN_OUT_CARDINALITIES:
                other_profile = profiles.get(other)
                if other in profile.always_loaded_with or (
                    other_profile is not None and name in other_profile.always_loaded_with
                ):
                    related.add(other)

        related.update(self.high_co_access(profile))
        related.discard(name)
        return tuple(sorted(related))

    def select_target(self, profile: EntityUsageProfile, related: Tuple[str, ...]) -> NoSQLTarget:
        # graph shape is judged on the whole fused row, the same one the penalty reads
        if any(c is Cardinality.MANY_TO_MANY for c in profile.related_entities.values()):
            return NoSQLTarget.NEPTUNE

        nested = any(p.is_nested for p in profile.query_patterns)
        if len(related) <= MAX_KEY_VALUE_RELATED and not nested and self.high_co_access(profile):
            return NoSQLTarget.DYNAMODB

        return NoSQLTarget.DOCUMENTDB

    def reason(self, profile: EntityUsageProfile) -> str:
        """Human-readable explanation, "; "-joined."""
        t = self.thresholds
        reasons = []

        if profile.eager_loading_count >= t.high_frequency_threshold:
            reasons.append(f"High frequency eager loading ({profile.eager_loading_count} occurrences)")

        if profile.always_loaded_with:
            reasons.append("Always loaded with: " + ", ".join(profile.always_loaded_with))

        ratio, reads = self.effective_read_write(profile)
        if reads > 0 and ratio >= t.high_read_write_ratio:
            reasons.append(f"Read-heavy access pattern (ratio: {ratio:.1f}:1)")

        complex_queries = profile.complex_eager_pattern_count()
        if complex_queries > 0:
            reasons.append(f"Complex eager loading patterns ({complex_queries} complex queries)")

        if profile.production_execution_count >= t.high_production_execution_threshold:
            reasons.append(f"High production execution volume ({profile.production_execution_count} executions)")

        co_accessed = self.high_co_access(profile)
        if co_accessed:
            reasons.append(
                "Co-accessed in production with: "
                + ", ".join(f"{name} ({profile.co_accessed_entities[name]})" for name in co_accessed)
            )

        return "; ".join(reasons)
