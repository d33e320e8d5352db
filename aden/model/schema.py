# ==============================================
# Database Schema (Data Classes)
# ==============================================
#
# PURPOSE:
#   The declared relational schema as handed over by the DDL parser:
#   tables, their columns and indexes, and foreign-key relationships.
#
# ENUMS:
# ------
# - Cardinality(Enum): ONE_TO_ONE, ONE_TO_MANY, MANY_TO_ONE, MANY_TO_MANY
#     Shared by schema relationships and navigation properties.
#
# CLASSES:
# --------
# - Column, Index, Table     → structure of one table
# - Relationship (frozen)    → one foreign key, from-table → to-table
# - DatabaseSchema           → tables + relationships
#
# ==============================================

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .keys import pick, require, enum_token


class Cardinality(Enum):
    """Cardinality of a link between two entities, seen from the owning side."""
    ONE_TO_ONE = "one-to-one"
    ONE_TO_MANY = "one-to-many"
    MANY_TO_ONE = "many-to-one"
    MANY_TO_MANY = "many-to-many"

    def inverse(self) -> "Cardinality":
        """Cardinality of the same link seen from the other side."""
        if self is Cardinality.ONE_TO_MANY:
            return Cardinality.MANY_TO_ONE
        if self is Cardinality.MANY_TO_ONE:
            return Cardinality.ONE_TO_MANY
        return self

    @classmethod
    def parse(cls, value: Any) -> "Cardinality":
        """Accept an enum member, its value, or any spelling of its name."""
        if isinstance(value, cls):
            return value
        token = enum_token(str(value))
        try:
            return cls[token]
        except KeyError:
            raise ValueError(f"Unknown cardinality: {value!r}") from None


@dataclass
class Column:
    name: str
    data_type: str = ""
    nullable: bool = True
    primary_key: bool = False
    foreign_key: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Column":
        return cls(
            name=data["name"],
            data_type=pick(data, "data_type", "dataType", ""),
            nullable=data.get("nullable", True),
            primary_key=pick(data, "primary_key", "primaryKey", False),
            foreign_key=pick(data, "foreign_key", "foreignKey", False),
        )


@dataclass
class Index:
    name: str
    columns: List[str] = field(default_factory=list)
    unique: bool = False
    clustered: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Index":
        return cls(
            name=data["name"],
            columns=list(data.get("columns", [])),
            unique=data.get("unique", False),
            clustered=data.get("clustered", False),
        )


@dataclass
class Table:
    name: str
    columns: List[Column] = field(default_factory=list)
    indexes: List[Index] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Table":
        return cls(
            name=data["name"],
            columns=[Column.from_dict(c) for c in data.get("columns", [])],
            indexes=[Index.from_dict(i) for i in data.get("indexes", [])],
        )


@dataclass(frozen=True)
class Relationship:
    """
    One foreign key declared in the schema.

    The cardinality is expressed from the from-table's point of view:
    Order.CustomerId → Customer.Id is MANY_TO_ONE.
    """
    from_table: str
    to_table: str
    cardinality: Cardinality
    from_column: str = ""
    to_column: str = ""
    name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "from_table": self.from_table,
            "from_column": self.from_column,
            "to_table": self.to_table,
            "to_column": self.to_column,
            "cardinality": self.cardinality.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Relationship":
        cardinality = pick(data, "cardinality", "type")
        return cls(
            name=data.get("name", ""),
            from_table=require(data, "from_table", "fromTable"),
            from_column=pick(data, "from_column", "fromColumn", ""),
            to_table=require(data, "to_table", "toTable"),
            to_column=pick(data, "to_column", "toColumn", ""),
            cardinality=Cardinality.parse(cardinality),
        )


@dataclass
class DatabaseSchema:
    tables: List[Table] = field(default_factory=list)
    relationships: List[Relationship] = field(default_factory=list)

    def find_table(self, name: str) -> Optional[Table]:
        """Case-insensitive table lookup."""
        lowered = name.lower()
        for table in self.tables:
            if table.name.lower() == lowered:
                return table
        return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DatabaseSchema":
        return cls(
            tables=[Table.from_dict(t) for t in data.get("tables", [])],
            relationships=[Relationship.from_dict(r) for r in data.get("relationships", [])],
        )
