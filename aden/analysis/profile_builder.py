# ==============================================
# UsageProfileBuilder
# ==============================================
#
# PURPOSE:
#   Observe the query patterns found in application code and
#   accumulate per-entity evidence into EntityUsageProfiles. This is
#   the "observation engine": it watches how code touches entities
#   and builds the evidence the classifier scores.
#
# WHY THIS CLASS EXISTS:
#   A pattern like "Customer.Orders" eager-loaded 100 times says three
#   things at once: Customer is read, Customer is eager-loaded, and
#   Order travels with it. This class splits each pattern into those
#   signals and sums them per entity.
#
# CLASS: UsageProfileBuilder
# --------------------------
#   Stateful: accumulates into the shared profile map across calls.
#
#   Constructor:
#   ------------
#   - __init__(resolver, thresholds, profiles)
#
#   Methods:
#   --------
#   - apply_relationships(fusion: FusionResult) -> None
#       Copy the fused graph into each profile's related_entities.
#
#   - analyze_patterns(patterns: list[QueryPattern]) -> None
#       For each pattern:
#         1. Resolve the owner (first segment); skip + warn if unknown
#         2. Attach the pattern to the owner's profile
#         3. Count it as read / write / shape-only via ACCESS_KINDS
#         4. Eager kinds add frequency to eager_loading_count and to
#            the (owner, related) pair sums for every include segment
#       Then any pair whose sum reaches the medium-frequency
#       threshold joins the owner's always_loaded_with.
#
# ==============================================

import logging
from enum import Enum
from typing import Dict, Iterable, List, Tuple

from ..model import QueryPattern, QueryType
from ..thresholds import MigrationThresholds
from .name_resolver import EntityNameResolver
from .relationship_fusion import FusionResult
from .usage_profile import EntityUsageProfile

logger = logging.getLogger(__name__)


class AccessKind(Enum):
    READ = "read"
    WRITE = "write"
    SHAPE = "shape"  # describes the query's form, not an access


ACCESS_KINDS: Dict[QueryType, AccessKind] = {
    QueryType.SINGLE_ENTITY: AccessKind.READ,
    QueryType.COLLECTION: AccessKind.READ,
    QueryType.FILTERED_SINGLE: AccessKind.READ,
    QueryType.FILTERED_COLLECTION: AccessKind.READ,
    QueryType.EAGER_LOADING: AccessKind.READ,
    QueryType.COMPLEX_EAGER_LOADING: AccessKind.READ,
    QueryType.COMPLEX_JOIN: AccessKind.READ,
    QueryType.INSERT: AccessKind.WRITE,
    QueryType.UPDATE: AccessKind.WRITE,
    QueryType.DELETE: AccessKind.WRITE,
    QueryType.WHERE_CLAUSE: AccessKind.SHAPE,
    QueryType.ORDER_BY: AccessKind.SHAPE,
    QueryType.AGGREGATION: AccessKind.SHAPE,
    QueryType.PAGINATION: AccessKind.SHAPE,
    QueryType.GROUP_BY: AccessKind.SHAPE,
}


class UsageProfileBuilder:
    """
    Accumulates query-pattern evidence into entity usage profiles.
    """

    def __init__(
        self,
        resolver: EntityNameResolver,
        thresholds: MigrationThresholds,
        profiles: Dict[str, EntityUsageProfile],
    ):
        self.resolver = resolver
        self.thresholds = thresholds
        self.profiles = profiles
        self.warnings: List[str] = []
        # (owner, related) → summed eager frequency
        self.eager_pairs: Dict[Tuple[str, str], int] = {}

    def _warn(self, message: str) -> None:
        logger.warning(message)
        self.warnings.append(message)

    def apply_relationships(self, fusion: FusionResult) -> None:
        for name, profile in self.profiles.items():
            profile.related_entities.update(fusion.related(name))

    def analyze_patterns(self, patterns: Iterable[QueryPattern]) -> None:
        """
        Observe a batch of query patterns.

        Args:
            patterns: Query patterns from the query analyzer
        """
        for pattern in patterns:
            self._analyze_pattern(pattern)
        self._mark_always_loaded()

    def _analyze_pattern(self, pattern: QueryPattern) -> None:
        owner, segments = self.resolver.resolve_include_path(pattern)
        if owner is None or owner not in self.profiles:
            self._warn(
                f"Query pattern target {pattern.target_entity} does not match any entity; skipped"
            )
            return

        profile = self.profiles[owner]
        profile.query_patterns.append(pattern)

        kind = ACCESS_KINDS[pattern.query_type]
        if kind is AccessKind.READ:
            profile.read_count += pattern.frequency
        elif kind is AccessKind.WRITE:
            profile.write_count += pattern.frequency

        if not pattern.is_eager:
            return

        profile.eager_loading_count += pattern.frequency
        for segment, related in segments:
            if related is None:
                self._warn(
                    f"Include segment {segment} in {pattern.target_entity} does not match any entity; skipped"
                )
                continue
            if related == owner:
                continue
            key = (owner, related)
            self.eager_pairs[key] = self.eager_pairs.get(key, 0) + pattern.frequency

    def _mark_always_loaded(self) -> None:
        medium = self.thresholds.medium_frequency_threshold
        for (owner, related), frequency in self.eager_pairs.items():
            if frequency >= medium:
                self.profiles[owner].add_always_loaded(related)
