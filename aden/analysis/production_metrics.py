# ==============================================
# ProductionMetricsAttributor
# ==============================================
#
# PURPOSE:
#   Apportion production telemetry onto entity profiles:
#
#   1. TableCombinations: "these N tables ran together E times"
#      become per-entity execution totals and per-pair co-access.
#   2. AnalyzedQueries: "this SELECT touched Orders 3000 times"
#      become per-entity production read/write counts.
#
# COUNTING RULES:
# ---------------
#   For one combination with count E over tables T:
#     - every entity in T gets production_execution_count += E
#       (the full count; a query touching 3 tables executed E times,
#       not E / 3 times)
#     - every ordered pair (t, u), t != u, gets co_accessed[t][u] += E
#   Two table names that resolve to the same entity count ONCE.
#   Unresolved tables are skipped with a warning per record.
#   Everything is additive, so combination order does not matter.
#
#   For one analyzed query with count E:
#     SELECT                         → production_read_count  += E
#     INSERT / UPDATE / DELETE / MERGE → production_write_count += E
#   once per resolved entity; other operation types are ignored.
#
# ==============================================

import logging
from typing import Dict, Iterable, List, Optional

from ..model import AnalyzedQuery, QueryStoreAnalysis, TableCombination
from .name_resolver import EntityNameResolver
from .usage_profile import EntityUsageProfile

logger = logging.getLogger(__name__)

READ_OPERATIONS = frozenset({"SELECT"})
WRITE_OPERATIONS = frozenset({"INSERT", "UPDATE", "DELETE", "MERGE"})


class ProductionMetricsAttributor:
    """
    Writes production execution and co-access counts into profiles.
    """

    def __init__(self, resolver: EntityNameResolver, profiles: Dict[str, EntityUsageProfile]):
        self.resolver = resolver
        self.profiles = profiles
        self.warnings: List[str] = []

    def _resolve_tables(self, tables: Iterable[str]) -> List[str]:
        """Resolve table names to distinct entity names, keeping first-seen order."""
        entities = []
        for table in tables:
            name = self.resolver.resolve(table)
            if name is None or name not in self.profiles:
                message = f"Production table {table} does not match any entity; ignored"
                logger.warning(message)
                self.warnings.append(message)
                continue
            if name not in entities:
                entities.append(name)
        return entities

    def attribute_combinations(self, combinations: Iterable[TableCombination]) -> None:
        """
        Apply table combination counts to execution totals and co-access.

        Args:
            combinations: Frequent table combinations from the query store
        """
        for combination in combinations:
            members = self._resolve_tables(combination.tables)
            executions = combination.total_executions

            for name in members:
                self.profiles[name].production_execution_count += executions

            for name in members:
                profile = self.profiles[name]
                for other in members:
                    if other != name:
                        profile.add_co_access(other, executions)

    def attribute_queries(self, queries: Iterable[AnalyzedQuery]) -> None:
        """Accumulate production read/write counts per entity."""
        for query in queries:
            operation = query.operation_type.upper()
            if operation in READ_OPERATIONS:
                attr = "production_read_count"
            elif operation in WRITE_OPERATIONS:
                attr = "production_write_count"
            else:
                continue

            for name in self._resolve_tables(query.tables_accessed):
                profile = self.profiles[name]
                setattr(profile, attr, getattr(profile, attr) + query.execution_count)

    def attribute(self, analysis: Optional[QueryStoreAnalysis]) -> None:
        """Apply a whole query-store analysis. None is a no-op."""
        if analysis is None:
            return
        logger.info(
            "Integrating production metrics: %d queries, %d table combinations",
            len(analysis.queries), len(analysis.table_combinations),
        )
        self.attribute_combinations(analysis.table_combinations)
        self.attribute_queries(analysis.queries)
