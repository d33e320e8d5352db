# ==============================================
# EntityUsageProfile
# ==============================================
#
# PURPOSE:
#   Data class that holds all observed usage evidence for a single
#   entity. This is the "evidence" that the classifier scores.
#
# WHY THIS CLASS EXISTS:
#   Three independent sources describe how an entity is used:
#   source-code query patterns, declared relationships, and production
#   telemetry. Every stage of the run writes into the SAME profile
#   instance for an entity, so the classifier reads one complete
#   picture instead of stitching sources together itself.
#
# CLASS: EntityUsageProfile (dataclass)
# -------------------------------------
#   Attributes:
#   -----------
#   - entity: EntityModel                    → The profiled entity
#   - eager_loading_count: int               → Summed eager-loading frequency
#   - read_count / write_count: int          → Source-code read/write frequency
#   - always_loaded_with: list[str]          → Ordered set of entity names
#   - related_entities: dict[str, Cardinality] → Fused relationship graph row
#   - co_accessed_entities: dict[str, int]   → Production co-access counts
#   - production_execution_count: int        → Sum of combination executions
#   - production_read_count / production_write_count: int
#   - query_patterns: list[QueryPattern]     → Patterns owned by this entity
#
#   Computed Properties:
#   --------------------
#   - entity_name -> str
#   - read_write_ratio -> float
#       reads / writes, or reads when there were no writes
#   - production_read_write_ratio -> float | None
#       Same from production counts; None when production never
#       touched the entity
#
#   Methods:
#   --------
#   - add_always_loaded(name) / add_co_access(name, count)
#   - complex_eager_pattern_count() -> int
#   - to_dict() -> dict
#
# ==============================================

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..model import Cardinality, EntityModel, QueryPattern, QueryType


def ratio(reads: int, writes: int) -> float:
    """reads / writes, falling back to reads when nothing was written."""
    if writes > 0:
        return reads / writes
    return float(reads)


@dataclass
class EntityUsageProfile:
    """
    Observed usage of one entity, accumulated across every source.
    """

    # --- Core identity ---
    entity: EntityModel

    # --- Source-code counters ---
    eager_loading_count: int = 0
    read_count: int = 0
    write_count: int = 0

    # --- Relationships ---
    always_loaded_with: List[str] = field(default_factory=list)  # insertion-ordered, no duplicates
    related_entities: Dict[str, Cardinality] = field(default_factory=dict)

    # --- Production telemetry ---
    co_accessed_entities: Dict[str, int] = field(default_factory=dict)
    production_execution_count: int = 0
    production_read_count: int = 0
    production_write_count: int = 0

    # --- Evidence ---
    query_patterns: List[QueryPattern] = field(default_factory=list)

    @property
    def entity_name(self) -> str:
        return self.entity.class_name

    # ======================================
    # Update logic
    # ======================================
    def add_always_loaded(self, entity_name: str) -> None:
        if entity_name not in self.always_loaded_with:
            self.always_loaded_with.append(entity_name)

    def add_co_access(self, entity_name: str, count: int) -> None:
        self.co_accessed_entities[entity_name] = self.co_accessed_entities.get(entity_name, 0) + count

    # ======================================
    # Computed properties
    # ======================================
    @property
    def read_write_ratio(self) -> float:
        return ratio(self.read_count, self.write_count)

    @property
    def production_read_write_ratio(self) -> Optional[float]:
        if self.production_read_count == 0 and self.production_write_count == 0:
            return None
        return ratio(self.production_read_count, self.production_write_count)

    @property
    def has_production_metrics(self) -> bool:
        return (
            self.production_execution_count > 0
            or self.production_read_write_ratio is not None
            or bool(self.co_accessed_entities)
        )

    def complex_eager_pattern_count(self) -> int:
        return sum(1 for p in self.query_patterns if p.query_type is QueryType.COMPLEX_EAGER_LOADING)

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the profile for the JSON result.

        Returns:
            A JSON-serializable dictionary representation
        """
        return {
            "entity": self.entity_name,
            "table_name": self.entity.effective_table_name,
            "eager_loading_count": self.eager_loading_count,
            "read_count": self.read_count,
            "write_count": self.write_count,
            "read_write_ratio": self.read_write_ratio,
            "always_loaded_with": list(self.always_loaded_with),
            "related_entities": {name: c.value for name, c in sorted(self.related_entities.items())},
            "co_accessed_entities": dict(sorted(self.co_accessed_entities.items())),
            "production_execution_count": self.production_execution_count,
            "production_read_count": self.production_read_count,
            "production_write_count": self.production_write_count,
            "production_read_write_ratio": self.production_read_write_ratio,
            "query_pattern_count": len(self.query_patterns),
        }
