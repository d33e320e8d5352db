# ==============================================
# Complexity Scoring
# ==============================================
#
# PURPOSE:
#   Estimate how hard an entity is to migrate (MigrationComplexity
#   tier for a candidate) and how tangled the application is as a
#   whole (ComplexityAnalysis).
#
# CANDIDATE COMPLEXITY (clamped to 0-100):
#   5  × navigation properties
#   2  × penalty × multiplier        if the entity references itself
#   3  × always-loaded entities
#   4  × complex eager-loading patterns
#   10 × many-to-many related entities
#   3  × schema relationships touching the entity
#   min(columns, 20) + 2 × indexes   of the entity's table
#
# APPLICATION COMPLEXITY (per entity, unbounded):
#   2 × navigation properties, +20 if circular, + patterns owned,
#   + 3 × schema relationships touching the entity
#
# ==============================================

import logging
from typing import Dict, Iterable, List

from ..model import Cardinality, DatabaseSchema, EntityModel, QueryType, Relationship
from ..thresholds import MigrationThresholds
from ..thresholds.profiles import round_half_up
from .decision import ComplexityAnalysis, MigrationComplexity
from .name_resolver import EntityNameResolver
from .usage_profile import EntityUsageProfile

logger = logging.getLogger(__name__)

__all__ = ["ComplexityAnalysis", "ComplexityScorer"]


class ComplexityScorer:
    """Computes migration complexity for entities and for the whole schema."""

    def __init__(self, resolver: EntityNameResolver, schema: DatabaseSchema, thresholds: MigrationThresholds):
        self.resolver = resolver
        self.schema = schema
        self.thresholds = thresholds

    def schema_relationships_for(self, entity_name: str) -> List[Relationship]:
        return [
            rel for rel in self.schema.relationships
            if self.resolver.resolve(rel.from_table) == entity_name
            or self.resolver.resolve(rel.to_table) == entity_name
        ]

    def entity_score(self, profile: EntityUsageProfile) -> int:
        """
        Complexity score for one candidate entity.

        Returns:
            Score clamped into [0, 100]
        """
        entity = profile.entity
        t = self.thresholds
        score = 5 * len(entity.navigation_properties)

        if entity.has_circular_references:
            score += round_half_up(2 * t.complex_relationship_penalty * t.complexity_penalty_multiplier)

        score += 3 * len(profile.always_loaded_with)
        score += 4 * profile.complex_eager_pattern_count()
        score += 10 * sum(1 for c in profile.related_entities.values() if c is Cardinality.MANY_TO_MANY)
        score += 3 * len(self.schema_relationships_for(entity.class_name))

        table = self.schema.find_table(entity.effective_table_name) or self.schema.find_table(entity.class_name)
        if table is not None:
            score += min(len(table.columns), 20)
            score += 2 * len(table.indexes)

        return max(0, min(100, score))

    def tier(self, profile: EntityUsageProfile) -> MigrationComplexity:
        return MigrationComplexity.from_score(self.entity_score(profile))

    def analyze(self, entities: Iterable[EntityModel], profiles: Dict[str, EntityUsageProfile]) -> ComplexityAnalysis:
        """
        Application-wide complexity analysis.

        Args:
            entities: Every known entity
            profiles: Usage profiles (for the patterns each entity owns)

        Returns:
            ComplexityAnalysis with per-entity scores, total and reason
        """
        scores: Dict[str, int] = {}
        for entity in entities:
            score = 2 * len(entity.navigation_properties)
            if entity.has_circular_references:
                score += 20
            profile = profiles.get(entity.class_name)
            if profile is not None:
                score += len(profile.query_patterns)
            score += 3 * len(self.schema_relationships_for(entity.class_name))
            scores[entity.class_name] = score

        complex_patterns = sum(
            1
            for p in profiles.values()
            for q in p.query_patterns
            if q.query_type is QueryType.COMPLEX_EAGER_LOADING
        )

        reasons = []
        top = sorted(scores.items(), key=lambda kv: (-kv[1], kv[0]))[:3]
        if top:
            reasons.append("Most complex entities: " + ", ".join(f"{name} ({score})" for name, score in top))
        reasons.append(f"Total relationships: {len(self.schema.relationships)}")
        reasons.append(f"Complex query patterns: {complex_patterns}")

        total = sum(scores.values())
        logger.debug("Overall complexity %d across %d entities", total, len(scores))
        return ComplexityAnalysis(
            entity_complexity_scores=scores,
            overall_complexity=total,
            complexity_reason="; ".join(reasons),
        )
