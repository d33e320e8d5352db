# ==============================================
# MODEL: Input records
# ==============================================
#
# Structured records produced by the external collaborators
# (model parser, DDL parser, query analyzer, query-store importer).
#
# Modules:
# --------
# - schema.py  → Cardinality, Table, Relationship, DatabaseSchema
# - entity.py  → EntityModel, NavigationProperty
# - query.py   → QueryType, QueryPattern, TableCombination, QueryStoreAnalysis
#
# ==============================================

from .schema import Cardinality, Column, Index, Table, Relationship, DatabaseSchema
from .entity import EntityModel, NavigationProperty
from .query import (
    QueryType,
    QueryPattern,
    TableCombination,
    AnalyzedQuery,
    QueryStoreAnalysis,
    EAGER_QUERY_TYPES,
)

__all__ = [
    "Cardinality",
    "Column",
    "Index",
    "Table",
    "Relationship",
    "DatabaseSchema",
    "EntityModel",
    "NavigationProperty",
    "QueryType",
    "QueryPattern",
    "TableCombination",
    "AnalyzedQuery",
    "QueryStoreAnalysis",
    "EAGER_QUERY_TYPES",
]
