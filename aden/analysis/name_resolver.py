# ==============================================
# EntityNameResolver
# ==============================================
#
# PURPOSE:
#   Map any name a source uses for an entity to the ONE canonical
#   entity name (EntityModel.class_name) that keys all aggregation.
#
# WHY THIS CLASS EXISTS:
#   The three sources disagree on naming:
#     - schema / query store:  "Customers"      (table name)
#     - model parser:          "Customer"       (class name)
#     - query analyzer:        "Customers"      (DB-set property alias)
#                              "customer"       (whatever the code said)
#   If we don't resolve, the same entity is counted under several
#   keys and every per-entity statistic is wrong.
#
# CLASS: EntityNameResolver
# -------------------------
#   Stateless after construction. Caches every lookup.
#
#   Resolution order:
#     1. exact effective table name, then exact entity name
#     2. alias mapping (alias → canonical entity name)
#     3. case-insensitive entity name / table name
#   Blank names and names nothing matches resolve to None.
#
#   Methods:
#   --------
#   - resolve(name) -> str | None
#   - resolve_navigation(from_entity, segment) -> str | None
#       Follow a navigation property name first ("Orders" on Customer
#       → "Order"), then fall back to resolve(segment).
#   - resolve_include_path(pattern) -> (owner, [(segment, resolved)])
#   - is_known(name) -> bool
#   - get_mappings() -> dict[str, str | None]
#
# ==============================================

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from ..model import EntityModel, QueryPattern

logger = logging.getLogger(__name__)


class EntityNameResolver:
    """
    Resolves table names, entity names and aliases to canonical entity names.
    """

    def __init__(self, entities: Iterable[EntityModel], aliases: Optional[Mapping[str, str]] = None):
        """
        Args:
            entities: Every known entity
            aliases: Source-level alias → canonical entity name
                     (e.g. {"Customers": "Customer"})
        """
        self._entities: Dict[str, EntityModel] = {}
        self._entity_names: Dict[str, str] = {}
        self._table_names: Dict[str, str] = {}
        self._lower: Dict[str, str] = {}

        for entity in entities:
            self._entities[entity.class_name] = entity
            self._entity_names[entity.class_name] = entity.class_name
            self._table_names[entity.effective_table_name] = entity.class_name

        # Entity names win over table names on a case-insensitive clash
        for table, entity in self._table_names.items():
            self._lower.setdefault(table.lower(), entity)
        for name in self._entity_names:
            self._lower[name.lower()] = name

        self._aliases: Dict[str, str] = {}
        for alias, target in (aliases or {}).items():
            canonical = self._direct(target)
            if canonical is None:
                logger.warning("Alias %s points at unknown entity %s", alias, target)
                continue
            self._aliases[alias] = canonical

        self._mappings: Dict[str, Optional[str]] = {}

    def _direct(self, name: str) -> Optional[str]:
        if name in self._table_names:
            return self._table_names[name]
        if name in self._entity_names:
            return name
        return self._lower.get(name.lower())

    def resolve(self, name: Optional[str]) -> Optional[str]:
        """
        Resolve a name to its canonical entity name.

        Args:
            name: Table name, entity name or alias

        Returns:
            Canonical entity name, or None when nothing matches
        """
        if name is None:
            return None
        name = name.strip()
        if not name:
            return None

        if name in self._mappings:
            return self._mappings[name]

        if name in self._table_names:
            resolved = self._table_names[name]
        elif name in self._entity_names:
            resolved = name
        elif name in self._aliases:
            resolved = self._aliases[name]
        else:
            resolved = self._lower.get(name.lower())

        self._mappings[name] = resolved
        return resolved

    def resolve_navigation(self, from_entity: Optional[str], segment: str) -> Optional[str]:
        """
        Resolve one include-path segment relative to the entity before it.

        "Orders" on Customer follows Customer's navigation property
        named "Orders"; a segment that is not a navigation property
        name falls back to plain resolve().
        """
        entity = self._entities.get(from_entity) if from_entity else None
        if entity is not None:
            prop = entity.find_navigation_property(segment)
            if prop is not None:
                target = self.resolve(prop.target_entity)
                if target is not None:
                    return target
        return self.resolve(segment)

    def resolve_include_path(self, pattern: QueryPattern) -> Tuple[Optional[str], List[Tuple[str, Optional[str]]]]:
        """
        Resolve the owner and every include segment of a pattern.

        Examples:
            "Customer.Orders.OrderItems" →
                ("Customer", [("Orders", "Order"), ("OrderItems", "OrderItem")])

        Returns:
            (owner or None, list of (segment, resolved name or None))
        """
        owner = self.resolve(pattern.owner_segment)
        resolved_segments = []
        previous = owner
        for segment in pattern.include_path:
            resolved = self.resolve_navigation(previous, segment)
            resolved_segments.append((segment, resolved))
            if resolved is not None:
                previous = resolved
        return owner, resolved_segments

    def is_known(self, name: Optional[str]) -> bool:
        return self.resolve(name) is not None

    def get_mappings(self) -> Dict[str, Optional[str]]:
        """Every name looked up so far and what it resolved to."""
        return self._mappings.copy()
