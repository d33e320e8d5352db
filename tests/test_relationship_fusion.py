# ==============================================
# Tests for RelationshipFusion
# ==============================================
#
# TEST CASES:
# -----------
# - schema foreign keys produce both directions
# - navigation cardinality beats the schema on conflict
# - query joins only fill gaps
# - unresolved schema relationships go to the schema-only bucket
# - self-references are never related entities
#
# ==============================================

from aden.analysis import EntityNameResolver, RelationshipFusion
from aden.model import Cardinality, EntityModel, NavigationProperty, QueryPattern, QueryType, Relationship

C = Cardinality


def fuse(entities, relationships=(), patterns=(), aliases=None):
    return RelationshipFusion(EntityNameResolver(entities, aliases)).fuse(entities, relationships, patterns)


class TestRelationshipFusion:
    def test_scenario(self, entities, schema, query_patterns):
        result = fuse(entities, schema.relationships, query_patterns)
        assert result.related("Customer") == {"Order": C.ONE_TO_MANY, "CustomerProfile": C.ONE_TO_ONE}
        assert result.related("Order") == {"Customer": C.MANY_TO_ONE}
        assert result.related("CustomerProfile") == {"Customer": C.ONE_TO_ONE}
        assert result.schema_only == []
        assert result.warnings == []

    def test_schema_gives_inverse(self):
        entities = [EntityModel("Order", table_name="Orders"), EntityModel("Customer", table_name="Customers")]
        result = fuse(entities, [Relationship("Orders", "Customers", C.MANY_TO_ONE)])
        assert result.related("Order") == {"Customer": C.MANY_TO_ONE}
        assert result.related("Customer") == {"Order": C.ONE_TO_MANY}

    def test_navigation_wins_conflict(self):
        entities = [
            EntityModel("Customer", navigation_properties=[
                NavigationProperty("Address", "Address", C.ONE_TO_ONE),
            ]),
            EntityModel("Address"),
        ]
        result = fuse(entities, [Relationship("Customer", "Address", C.ONE_TO_MANY)])
        assert result.related("Customer")["Address"] is C.ONE_TO_ONE
        assert result.related("Address")["Customer"] is C.ONE_TO_ONE

    def test_target_navigation_beats_inferred_inverse(self):
        entities = [
            EntityModel("Student", navigation_properties=[
                NavigationProperty("Courses", "Course", C.ONE_TO_MANY),
            ]),
            EntityModel("Course", navigation_properties=[
                NavigationProperty("Students", "Student", C.MANY_TO_MANY),
            ]),
        ]
        result = fuse(entities)
        assert result.related("Student")["Course"] is C.ONE_TO_MANY
        assert result.related("Course")["Student"] is C.MANY_TO_MANY

    def test_query_join_fills_gap_only(self):
        entities = [
            EntityModel("Customer", navigation_properties=[
                NavigationProperty("Profile", "CustomerProfile", C.ONE_TO_ONE),
            ]),
            EntityModel("CustomerProfile"),
            EntityModel("Coupon"),
        ]
        patterns = [
            QueryPattern("Customer.CustomerProfile", QueryType.EAGER_LOADING, 10),
            QueryPattern("Customer", QueryType.COMPLEX_JOIN, 3, join_entities=["Coupon"]),
        ]
        result = fuse(entities, patterns=patterns)
        assert result.related("Customer")["CustomerProfile"] is C.ONE_TO_ONE
        assert result.related("Customer")["Coupon"] is C.ONE_TO_MANY
        assert result.related("Coupon")["Customer"] is C.MANY_TO_ONE

    def test_unresolved_schema_relationship(self, entities, caplog):
        rel = Relationship("AuditLog", "Customers", C.MANY_TO_ONE, name="FK_Audit")
        result = fuse(entities, [rel])
        assert result.schema_only == [rel]
        assert "Customer" not in result.related("Customer")
        assert "AuditLog" in result.warnings[0]
        assert "schema-only" in caplog.text

    def test_self_reference_not_related(self):
        entities = [
            EntityModel("Category", navigation_properties=[
                NavigationProperty("Parent", "Category", C.MANY_TO_ONE),
            ]),
        ]
        result = fuse(entities, [Relationship("Category", "Category", C.MANY_TO_ONE)])
        assert result.related("Category") == {}
        assert entities[0].has_circular_references

    def test_unknown_navigation_target_warns(self):
        entities = [
            EntityModel("Customer", navigation_properties=[
                NavigationProperty("Wishlist", "Wishlist", C.ONE_TO_MANY),
            ]),
        ]
        result = fuse(entities)
        assert result.related("Customer") == {}
        assert "Customer.Wishlist" in result.warnings[0]

    def test_aliases_resolve_schema_tables(self):
        entities = [EntityModel("Order"), EntityModel("Customer")]
        result = fuse(
            entities,
            [Relationship("tblOrder", "tblCustomer", C.MANY_TO_ONE)],
            aliases={"tblOrder": "Order", "tblCustomer": "Customer"},
        )
        assert result.related("Customer") == {"Order": C.ONE_TO_MANY}
