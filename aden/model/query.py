# ==============================================
# Query Observations (Data Classes)
# ==============================================
#
# PURPOSE:
#   Two kinds of query evidence reach the analyzer:
#
#   1. QueryPattern: a query shape found in application source code
#      by the query analyzer, e.g. "Customer.Orders" eager-loaded
#      150 times across the codebase.
#
#   2. QueryStoreAnalysis: production telemetry: individual analyzed
#      queries (operation type + tables + execution count) and
#      TableCombinations (N tables seen together + execution count).
#
# ENUMS:
# ------
# - QueryType(Enum): the closed set of query kinds. Which kinds count
#   as reads or writes is decided by a lookup table in the profile
#   builder, not by the enum itself.
#
# ==============================================

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .keys import pick, require, enum_token


class QueryType(Enum):
    SINGLE_ENTITY = "single-entity"
    COLLECTION = "collection"
    FILTERED_SINGLE = "filtered-single"
    FILTERED_COLLECTION = "filtered-collection"
    EAGER_LOADING = "eager-loading"
    COMPLEX_EAGER_LOADING = "complex-eager-loading"
    COMPLEX_JOIN = "complex-join"
    WHERE_CLAUSE = "where-clause"
    ORDER_BY = "order-by"
    AGGREGATION = "aggregation"
    PAGINATION = "pagination"
    GROUP_BY = "group-by"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"

    @classmethod
    def parse(cls, value: Any) -> "QueryType":
        if isinstance(value, cls):
            return value
        token = enum_token(str(value))
        try:
            return cls[token]
        except KeyError:
            raise ValueError(f"Unknown query type: {value!r}") from None


EAGER_QUERY_TYPES = frozenset({QueryType.EAGER_LOADING, QueryType.COMPLEX_EAGER_LOADING})


@dataclass
class QueryPattern:
    """
    One observed query shape.

    target_entity is either a plain name ("Customer", "Customers") or a
    dotted include path ("Customer.Orders.OrderItems") where the first
    segment owns the query and the rest are loaded alongside it.
    """

    target_entity: str
    query_type: QueryType
    frequency: int = 1
    source_files: List[str] = field(default_factory=list)
    pattern: str = ""

    # --- Shape metadata ---
    filter_fields: List[str] = field(default_factory=list)
    order_by_fields: List[str] = field(default_factory=list)
    join_entities: List[str] = field(default_factory=list)
    has_complex_where: bool = False
    has_aggregation: bool = False
    has_pagination: bool = False

    @property
    def owner_segment(self) -> str:
        """First segment of the target, e.g. "Customer" for "Customer.Orders"."""
        return self.target_entity.split(".", 1)[0]

    @property
    def include_path(self) -> List[str]:
        """Segments loaded alongside the owner, e.g. ["Orders", "OrderItems"]."""
        return [s for s in self.target_entity.split(".")[1:] if s]

    @property
    def is_eager(self) -> bool:
        return self.query_type in EAGER_QUERY_TYPES

    @property
    def is_nested(self) -> bool:
        """True for include paths more than one level deep."""
        return len(self.include_path) > 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "target_entity": self.target_entity,
            "query_type": self.query_type.name,
            "frequency": self.frequency,
            "source_files": list(self.source_files),
            "pattern": self.pattern,
            "filter_fields": list(self.filter_fields),
            "order_by_fields": list(self.order_by_fields),
            "join_entities": list(self.join_entities),
            "has_complex_where": self.has_complex_where,
            "has_aggregation": self.has_aggregation,
            "has_pagination": self.has_pagination,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QueryPattern":
        query_type = pick(data, "query_type", "queryType")
        if query_type is None:
            query_type = data["type"]
        return cls(
            target_entity=require(data, "target_entity", "targetEntity"),
            query_type=QueryType.parse(query_type),
            frequency=int(data.get("frequency", 1)),
            source_files=list(pick(data, "source_files", "sourceFiles", [])),
            pattern=data.get("pattern") or "",
            filter_fields=list(pick(data, "filter_fields", "filterFields", [])),
            order_by_fields=list(pick(data, "order_by_fields", "orderByFields", [])),
            join_entities=list(pick(data, "join_entities", "joinEntities", [])),
            has_complex_where=pick(data, "has_complex_where", "hasComplexWhere", False),
            has_aggregation=pick(data, "has_aggregation", "hasAggregation", False),
            has_pagination=pick(data, "has_pagination", "hasPagination", False),
        )


@dataclass(frozen=True)
class TableCombination:
    """A set of tables seen together in production queries."""
    tables: List[str]
    total_executions: int
    execution_percentage: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tables": list(self.tables),
            "total_executions": self.total_executions,
            "execution_percentage": self.execution_percentage,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TableCombination":
        return cls(
            tables=list(data["tables"]),
            total_executions=int(pick(data, "total_executions", "totalExecutions", 0)),
            execution_percentage=float(pick(data, "execution_percentage", "executionPercentage", 0.0)),
        )


@dataclass(frozen=True)
class AnalyzedQuery:
    """One production query with its execution count and touched tables."""
    query_id: str
    execution_count: int
    operation_type: str
    tables_accessed: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalyzedQuery":
        return cls(
            query_id=str(pick(data, "query_id", "queryId", "")),
            execution_count=int(pick(data, "execution_count", "executionCount", 0)),
            operation_type=str(pick(data, "operation_type", "operationType", "")).upper(),
            tables_accessed=list(pick(data, "tables_accessed", "tablesAccessed", [])),
        )


@dataclass
class QueryStoreAnalysis:
    """Production telemetry handed over by the query-store importer."""
    queries: List[AnalyzedQuery] = field(default_factory=list)
    table_combinations: List[TableCombination] = field(default_factory=list)
    database: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QueryStoreAnalysis":
        """
        Build from either the flat form
            {"queries": [...], "tableCombinations": [...]}
        or the exporter's nested form
            {"queries": [...], "qualifiedMetrics": {"tableAccessPatterns":
                {"frequentTableCombinations": [...]}}}
        """
        combinations = pick(data, "table_combinations", "tableCombinations")
        if combinations is None:
            metrics = pick(data, "qualified_metrics", "qualifiedMetrics") or {}
            patterns = pick(metrics, "table_access_patterns", "tableAccessPatterns") or {}
            combinations = pick(patterns, "frequent_table_combinations", "frequentTableCombinations") or []
        return cls(
            queries=[AnalyzedQuery.from_dict(q) for q in data.get("queries", [])],
            table_combinations=[TableCombination.from_dict(c) for c in combinations],
            database=data.get("database"),
        )
