# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# This file contains shared fixtures for all tests.
#
# FIXTURES:
# ---------
# - entities        → Customer, Order, CustomerProfile with navigation properties
# - schema          → Customers / Orders / CustomerProfiles with two foreign keys
# - aliases         → DB-set names → entity names
# - query_patterns  → "Customer.Orders" eager-loaded 100 times
# - query_store     → {Customers, CustomerProfiles} executed 5000 times together
# - bundle_dict     → the same scenario as a JSON input bundle
# - bundle_path     → bundle_dict written to tmp_path
# - clean_env       → removes ADEN_* variables, isolates ~/.aden/config.json
#
# ==============================================

import json
import os

import pytest

from aden.model import (
    Cardinality,
    Column,
    DatabaseSchema,
    EntityModel,
    Index,
    NavigationProperty,
    QueryPattern,
    QueryStoreAnalysis,
    QueryType,
    Relationship,
    Table,
    TableCombination,
)


@pytest.fixture
def entities():
    return [
        EntityModel(
            class_name="Customer",
            file_name="Models/Customer.cs",
            table_name="Customers",
            navigation_properties=[
                NavigationProperty("Orders", "Order", Cardinality.ONE_TO_MANY),
                NavigationProperty("Profile", "CustomerProfile", Cardinality.ONE_TO_ONE),
            ],
        ),
        EntityModel(
            class_name="Order",
            file_name="Models/Order.cs",
            table_name="Orders",
            navigation_properties=[
                NavigationProperty("Customer", "Customer", Cardinality.MANY_TO_ONE),
            ],
        ),
        EntityModel(
            class_name="CustomerProfile",
            file_name="Models/CustomerProfile.cs",
            table_name="CustomerProfiles",
            navigation_properties=[
                NavigationProperty("Customer", "Customer", Cardinality.ONE_TO_ONE),
            ],
        ),
    ]


@pytest.fixture
def schema():
    return DatabaseSchema(
        tables=[
            Table(
                "Customers",
                columns=[Column("Id", "int", primary_key=True), Column("Name"), Column("Email"), Column("CreatedAt")],
                indexes=[Index("IX_Customers_Email", ["Email"], unique=True)],
            ),
            Table("Orders", columns=[Column("Id"), Column("CustomerId", foreign_key=True), Column("Total")]),
            Table("CustomerProfiles", columns=[Column("Id"), Column("CustomerId", foreign_key=True)]),
        ],
        relationships=[
            Relationship("Orders", "Customers", Cardinality.MANY_TO_ONE, "CustomerId", "Id", "FK_Orders_Customers"),
            Relationship("CustomerProfiles", "Customers", Cardinality.ONE_TO_ONE, "CustomerId", "Id",
                         "FK_CustomerProfiles_Customers"),
        ],
    )


@pytest.fixture
def aliases():
    return {"Customers": "Customer", "Orders": "Order", "CustomerProfiles": "CustomerProfile"}


@pytest.fixture
def query_patterns():
    return [
        QueryPattern(
            target_entity="Customer.Orders",
            query_type=QueryType.EAGER_LOADING,
            frequency=100,
            source_files=["Services/CustomerService.cs"],
            pattern="Include(c => c.Orders)",
        ),
    ]


@pytest.fixture
def query_store():
    return QueryStoreAnalysis(
        table_combinations=[TableCombination(["Customers", "CustomerProfiles"], 5000, 45.0)],
        database="TestEcommerceApp",
    )


@pytest.fixture
def bundle_dict():
    return {
        "entities": [
            {
                "className": "Customer",
                "fileName": "Models/Customer.cs",
                "tableName": "Customers",
                "navigationProperties": [
                    {"propertyName": "Orders", "targetEntity": "Order", "type": "ONE_TO_MANY"},
                    {"propertyName": "Profile", "targetEntity": "CustomerProfile", "type": "ONE_TO_ONE"},
                ],
            },
            {
                "className": "Order",
                "tableName": "Orders",
                "navigationProperties": [
                    {"propertyName": "Customer", "targetEntity": "Customer", "type": "MANY_TO_ONE"},
                ],
            },
            {
                "className": "CustomerProfile",
                "tableName": "CustomerProfiles",
                "navigationProperties": [
                    {"propertyName": "Customer", "targetEntity": "Customer", "type": "ONE_TO_ONE"},
                ],
            },
        ],
        "queryPatterns": [
            {"targetEntity": "Customer.Orders", "queryType": "EAGER_LOADING", "frequency": 100},
        ],
        "schema": {
            "tables": [
                {"name": "Customers", "columns": [{"name": "Id", "primaryKey": True}, {"name": "Name"}]},
                {"name": "Orders", "columns": [{"name": "Id"}, {"name": "CustomerId", "foreignKey": True}]},
                {"name": "CustomerProfiles", "columns": [{"name": "Id"}]},
            ],
            "relationships": [
                {"name": "FK_Orders_Customers", "fromTable": "Orders", "fromColumn": "CustomerId",
                 "toTable": "Customers", "toColumn": "Id", "type": "MANY_TO_ONE"},
            ],
        },
        "aliases": {"Customers": "Customer", "Orders": "Order", "CustomerProfiles": "CustomerProfile"},
        "queryStore": {
            "database": "TestEcommerceApp",
            "queries": [
                {"queryId": "1", "executionCount": 3000, "operationType": "SELECT",
                 "tablesAccessed": ["Customers", "CustomerProfiles"]},
            ],
            "qualifiedMetrics": {
                "tableAccessPatterns": {
                    "frequentTableCombinations": [
                        {"tables": ["Customers", "CustomerProfiles"], "totalExecutions": 5000,
                         "executionPercentage": 45.0},
                    ],
                },
            },
        },
    }


@pytest.fixture
def bundle_path(tmp_path, bundle_dict):
    path = tmp_path / "bundle.json"
    path.write_text(json.dumps(bundle_dict), encoding="utf-8")
    return path


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Strip ADEN_* variables and point the user config somewhere empty."""
    for name in list(os.environ):
        if name.startswith("ADEN_"):
            monkeypatch.delenv(name)
    monkeypatch.setenv("ADEN_USER_CONFIG", str(tmp_path / "no-user-config.json"))
    monkeypatch.chdir(tmp_path)
    return tmp_path
