# ==============================================
# RelationshipFusion
# ==============================================
#
# PURPOSE:
#   Merge the three descriptions of how entities relate into ONE
#   graph keyed by canonical entity name:
#
#     1. Navigation properties from the model parser   (strongest)
#     2. Foreign keys from the database schema
#     3. Joins implied by query patterns               (weakest)
#
# WHY THIS CLASS EXISTS:
#   Each source is incomplete on its own. The schema knows every
#   foreign key but not the application's view of it; navigation
#   properties carry the intended cardinality but only for mapped
#   entities; query patterns show joins nobody declared. When two
#   sources disagree on a pair, the stronger one wins.
#
# RULES:
# ------
#   SCHEMA:     from → to : cardinality, to → from : cardinality.inverse()
#               Either end unresolved → schema-only bucket + warning.
#   NAVIGATION: owner → target : declared cardinality
#               target → owner : inverse, unless target declares its own
#               navigation property back to owner.
#   QUERY:      owner → related : ONE_TO_MANY (and the inverse back),
#               only for pairs no other source describes.
#   Self-references are never recorded as related entities.
#
# CLASS: RelationshipFusion
# -------------------------
#   - __init__(resolver: EntityNameResolver)
#   - fuse(entities, relationships, query_patterns) -> FusionResult
#
# ==============================================

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from ..model import Cardinality, EntityModel, QueryPattern, Relationship
from .name_resolver import EntityNameResolver

logger = logging.getLogger(__name__)

# Source precedence; higher wins a conflict on the same ordered pair.
QUERY_DERIVED = 0
SCHEMA_DERIVED = 1
NAVIGATION_INVERSE = 2
NAVIGATION_DERIVED = 3


@dataclass
class FusionResult:
    """Output of one fusion pass."""
    relationships: Dict[str, Dict[str, Cardinality]] = field(default_factory=dict)
    schema_only: List[Relationship] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def related(self, entity_name: str) -> Dict[str, Cardinality]:
        return self.relationships.get(entity_name, {})


class RelationshipFusion:
    """
    Builds the fused relationship graph for one run.
    """

    def __init__(self, resolver: EntityNameResolver):
        self.resolver = resolver
        self._edges: Dict[Tuple[str, str], Tuple[Cardinality, int]] = {}
        self._warnings: List[str] = []

    def _warn(self, message: str) -> None:
        logger.warning(message)
        self._warnings.append(message)

    def _put(self, source: str, target: str, cardinality: Cardinality, rank: int) -> None:
        if source == target:
            return
        existing = self._edges.get((source, target))
        if existing is None or rank >= existing[1]:
            self._edges[(source, target)] = (cardinality, rank)

    def _describes(self, a: str, b: str) -> bool:
        return (a, b) in self._edges or (b, a) in self._edges

    def fuse(
        self,
        entities: Iterable[EntityModel],
        relationships: Iterable[Relationship],
        query_patterns: Iterable[QueryPattern] = (),
    ) -> FusionResult:
        """
        Fuse all relationship sources.

        Args:
            entities: Entities with their navigation properties
            relationships: Foreign keys from the database schema
            query_patterns: Observed query patterns

        Returns:
            FusionResult with per-entity related → cardinality maps
        """
        self._edges = {}
        self._warnings = []
        entities = list(entities)
        schema_only = self._add_schema_relationships(relationships)
        self._add_navigation_properties(entities)
        self._add_query_joins(query_patterns)

        fused: Dict[str, Dict[str, Cardinality]] = {e.class_name: {} for e in entities}
        for (source, target), (cardinality, _) in sorted(self._edges.items()):
            fused.setdefault(source, {})[target] = cardinality

        logger.debug(
            "Fused %d relationship edges (%d schema-only)", len(self._edges), len(schema_only)
        )
        return FusionResult(relationships=fused, schema_only=schema_only, warnings=list(self._warnings))

    # ======================================
    # Sources
    # ======================================
    def _add_schema_relationships(self, relationships: Iterable[Relationship]) -> List[Relationship]:
        schema_only = []
        for rel in relationships:
            source = self.resolver.resolve(rel.from_table)
            target = self.resolver.resolve(rel.to_table)
            if source is None or target is None:
                unresolved = rel.from_table if source is None else rel.to_table
                self._warn(
                    f"Relationship {rel.name or '<unnamed>'} ({rel.from_table} -> {rel.to_table}) "
                    f"references unknown table {unresolved}; kept as schema-only"
                )
                schema_only.append(rel)
                continue
            self._put(source, target, rel.cardinality, SCHEMA_DERIVED)
            self._put(target, source, rel.cardinality.inverse(), SCHEMA_DERIVED)
        return schema_only

    def _add_navigation_properties(self, entities: List[EntityModel]) -> None:
        for entity in entities:
            for prop in entity.navigation_properties:
                target = self.resolver.resolve(prop.target_entity)
                if target is None:
                    self._warn(
                        f"Navigation property {entity.class_name}.{prop.property_name} "
                        f"targets unknown entity {prop.target_entity}"
                    )
                    continue
                self._put(entity.class_name, target, prop.cardinality, NAVIGATION_DERIVED)
                self._put(target, entity.class_name, prop.cardinality.inverse(), NAVIGATION_INVERSE)

    def _add_query_joins(self, query_patterns: Iterable[QueryPattern]) -> None:
        for pattern in query_patterns:
            owner, segments = self.resolver.resolve_include_path(pattern)
            if owner is None:
                continue

            pairs: List[Tuple[str, Optional[str]]] = []
            previous = owner
            for _, resolved in segments:
                if resolved is None:
                    continue
                pairs.append((previous, resolved))
                previous = resolved
            for name in pattern.join_entities:
                pairs.append((owner, self.resolver.resolve(name)))

            for source, target in pairs:
                if target is None or source == target or self._describes(source, target):
                    continue
                self._put(source, target, Cardinality.ONE_TO_MANY, QUERY_DERIVED)
                self._put(target, source, Cardinality.MANY_TO_ONE, QUERY_DERIVED)
