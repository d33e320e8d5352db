# ==============================================
# Entity Model (Data Classes)
# ==============================================
#
# PURPOSE:
#   Business entities as found by the object-relational model parser,
#   with the navigation properties that link them to other entities.
#   Read-only to the analyzer.
#
# CLASSES:
# --------
# - NavigationProperty
#     property_name: str         → e.g. "Orders"
#     target_entity: str         → e.g. "Order"
#     cardinality: Cardinality   → declared by the model (ONE_TO_MANY, ...)
#
# - EntityModel
#     class_name: str            → canonical entity name
#     table_name: str | None     → mapped table when it differs from class_name
#     navigation_properties      → outgoing references
#
# ==============================================

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .keys import pick, require
from .schema import Cardinality


@dataclass(frozen=True)
class NavigationProperty:
    property_name: str
    target_entity: str
    cardinality: Cardinality

    def to_dict(self) -> Dict[str, Any]:
        return {
            "property_name": self.property_name,
            "target_entity": self.target_entity,
            "cardinality": self.cardinality.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NavigationProperty":
        return cls(
            property_name=require(data, "property_name", "propertyName"),
            target_entity=require(data, "target_entity", "targetEntity"),
            cardinality=Cardinality.parse(pick(data, "cardinality", "type")),
        )


@dataclass
class EntityModel:
    """One business entity and its outgoing navigation properties."""

    class_name: str
    file_name: str = ""
    table_name: Optional[str] = None
    navigation_properties: List[NavigationProperty] = field(default_factory=list)

    @property
    def effective_table_name(self) -> str:
        """Mapped table name, falling back to the class name."""
        return self.table_name or self.class_name

    @property
    def has_circular_references(self) -> bool:
        """True if any navigation property points back at this entity."""
        return any(p.target_entity == self.class_name for p in self.navigation_properties)

    def add_navigation_property(self, prop: NavigationProperty) -> None:
        self.navigation_properties.append(prop)

    def find_navigation_property(self, property_name: str) -> Optional[NavigationProperty]:
        for prop in self.navigation_properties:
            if prop.property_name == property_name:
                return prop
        return None

    def count_cardinality(self, cardinality: Cardinality) -> int:
        return sum(1 for p in self.navigation_properties if p.cardinality is cardinality)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "class_name": self.class_name,
            "file_name": self.file_name,
            "table_name": self.effective_table_name,
            "navigation_properties": [p.to_dict() for p in self.navigation_properties],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EntityModel":
        return cls(
            class_name=require(data, "class_name", "className"),
            file_name=pick(data, "file_name", "fileName", ""),
            table_name=pick(data, "table_name", "tableName"),
            navigation_properties=[
                NavigationProperty.from_dict(p)
                for p in pick(data, "navigation_properties", "navigationProperties", [])
            ],
        )
