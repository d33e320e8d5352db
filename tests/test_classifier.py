# ==============================================
# Tests for Classifier
# ==============================================
#
# TEST CASES:
# -----------
# class TestExclusion       → eager / always-loaded / co-access gates
# class TestScore           → category points, caps, penalties, floor
# class TestTarget          → NEPTUNE / DYNAMODB / DOCUMENTDB topology rules
# class TestTiers           → complexity tiers and score interpretation
# class TestClassifyAll     → ordering and reasons
# class TestGraphRouting    → many-to-many routes to NEPTUNE even when not loaded
#
# ==============================================

import pytest

from aden.analysis import (
    Classifier,
    ComplexityScorer,
    EntityNameResolver,
    EntityUsageProfile,
    MigrationComplexity,
    NoSQLTarget,
)
from aden.analysis.decision import interpret_score
from aden.model import Cardinality, DatabaseSchema, EntityModel, NavigationProperty, QueryPattern, QueryType
from aden.thresholds import MigrationThresholds

M2M = Cardinality.MANY_TO_MANY


def profile(name="A", **fields):
    return EntityUsageProfile(entity=EntityModel(name), **fields)


def scorer_for(profiles, thresholds=None):
    entities = [p.entity for p in profiles.values()]
    return ComplexityScorer(EntityNameResolver(entities), DatabaseSchema(), thresholds or MigrationThresholds())


class TestExclusion:
    def test_co_access_below_threshold_excluded(self):
        p = profile(eager_loading_count=19, co_accessed_entities={"B": 499})
        assert not Classifier().is_candidate(p)

    def test_co_access_at_threshold_included(self):
        p = profile(eager_loading_count=19, co_accessed_entities={"B": 500})
        assert Classifier().is_candidate(p)

    def test_eager_at_medium_included(self):
        assert Classifier().is_candidate(profile(eager_loading_count=20))

    def test_always_loaded_included(self):
        assert Classifier().is_candidate(profile(always_loaded_with=["B"]))

    def test_excluded_profile_yields_no_candidate(self):
        p = profile(read_count=1000)
        profiles = {"A": p}
        assert Classifier().classify(p, profiles, scorer_for(profiles)) is None


class TestScore:
    def test_eager_points_scale_and_cap(self):
        c = Classifier()
        assert c.score(profile(eager_loading_count=25)) == 25
        assert c.score(profile(eager_loading_count=50)) == 50
        assert c.score(profile(eager_loading_count=1000)) == 100

    def test_always_loaded_cap(self):
        p = profile(always_loaded_with=["B", "C", "D", "E"])
        assert Classifier().score(p) == 30

    def test_simple_key_access(self):
        p = profile(read_count=15, query_patterns=[QueryPattern("A", QueryType.SINGLE_ENTITY, 15)])
        # read-heavy 20 + simple key 15
        assert Classifier().score(p) == 35

    def test_simple_key_needs_every_pattern(self):
        p = profile(read_count=15, query_patterns=[
            QueryPattern("A", QueryType.SINGLE_ENTITY, 10),
            QueryPattern("A", QueryType.COLLECTION, 5),
        ])
        assert Classifier().score(p) == 20

    def test_read_heavy_needs_reads(self):
        assert Classifier().score(profile(read_count=0, write_count=0)) == 0

    def test_production_ratio_beats_code_ratio(self):
        p = profile(read_count=50, write_count=1, production_read_count=10, production_write_count=5)
        c = Classifier()
        assert c.effective_read_write(p) == (2.0, 10)
        assert c.score(p) == 0

    def test_complex_queries(self):
        patterns = [QueryPattern("A.B", QueryType.COMPLEX_EAGER_LOADING, 0) for _ in range(3)]
        assert Classifier().score(profile(query_patterns=patterns)) == 15
        t = MigrationThresholds(complex_query_requirement=3)
        assert Classifier(t).score(profile(query_patterns=patterns)) == 25

    def test_production_volume_and_co_access_caps(self):
        p = profile(production_execution_count=10_000, co_accessed_entities={"B": 600, "C": 700, "D": 800, "E": 10})
        assert Classifier().score(p) == 30 + 20

    def test_circular_penalty(self):
        entity = EntityModel("Category", navigation_properties=[
            NavigationProperty("Parent", "Category", Cardinality.MANY_TO_ONE),
        ])
        p = EntityUsageProfile(entity=entity, eager_loading_count=50)
        assert Classifier().score(p) == 40

    def test_penalty_rounds_half_up(self):
        entity = EntityModel("Category", navigation_properties=[
            NavigationProperty("Parent", "Category", Cardinality.MANY_TO_ONE),
        ])
        p = EntityUsageProfile(entity=entity, eager_loading_count=50)
        t = MigrationThresholds(complex_relationship_penalty=5, complexity_penalty_multiplier=0.5)
        assert Classifier(t).score(p) == 47

    def test_many_to_many_weight_capped(self):
        p = profile(eager_loading_count=100, related_entities={"B": M2M, "C": M2M, "D": M2M})
        assert Classifier().score(p) == 80

    def test_floor_at_zero(self):
        p = profile(related_entities={"B": M2M, "C": M2M})
        assert Classifier().score(p) == 0


class TestTarget:
    def test_many_to_many_is_graph(self):
        p = profile(always_loaded_with=["B"], related_entities={"B": M2M}, co_accessed_entities={"B": 900})
        related = Classifier().related_entities(p, {"A": p})
        assert related == ("B",)
        assert Classifier().select_target(p, related) is NoSQLTarget.NEPTUNE

    def test_flat_co_accessed_is_key_value(self):
        p = profile(co_accessed_entities={"B": 900})
        assert Classifier().select_target(p, ("B",)) is NoSQLTarget.DYNAMODB

    def test_nested_is_document(self):
        p = profile(
            co_accessed_entities={"B": 900},
            query_patterns=[QueryPattern("A.B.C", QueryType.COMPLEX_EAGER_LOADING, 30)],
        )
        assert Classifier().select_target(p, ("B", "C")) is NoSQLTarget.DOCUMENTDB

    def test_no_co_access_is_document(self):
        assert Classifier().select_target(profile(), ("B",)) is NoSQLTarget.DOCUMENTDB

    def test_too_many_related_is_document(self):
        p = profile(co_accessed_entities={"B": 900})
        assert Classifier().select_target(p, ("B", "C", "D", "E")) is NoSQLTarget.DOCUMENTDB

    def test_fan_out_partner_needs_always_loaded(self):
        a = profile("A", related_entities={"B": Cardinality.ONE_TO_MANY, "C": Cardinality.ONE_TO_MANY})
        b = profile("B", related_entities={"A": Cardinality.MANY_TO_ONE}, always_loaded_with=["A"])
        c = profile("C", related_entities={"A": Cardinality.MANY_TO_ONE})
        profiles = {"A": a, "B": b, "C": c}
        assert Classifier().related_entities(a, profiles) == ("B",)

    def test_display_names(self):
        assert NoSQLTarget.DYNAMODB.display_name == "Amazon DynamoDB"
        assert NoSQLTarget.NEPTUNE.display_name == "Amazon Neptune"


class TestTiers:
    def test_complexity_tiers_cover_range(self):
        for score in range(101):
            assert MigrationComplexity.from_score(score) in MigrationComplexity

    @pytest.mark.parametrize("score,tier", [
        (0, MigrationComplexity.LOW),
        (30, MigrationComplexity.LOW),
        (31, MigrationComplexity.MEDIUM),
        (60, MigrationComplexity.MEDIUM),
        (61, MigrationComplexity.HIGH),
        (100, MigrationComplexity.HIGH),
    ])
    def test_complexity_boundaries(self, score, tier):
        assert MigrationComplexity.from_score(score) is tier

    @pytest.mark.parametrize("score,prefix", [
        (150, "Excellent"),
        (149, "Strong"),
        (100, "Strong"),
        (99, "Good"),
        (60, "Good"),
        (59, "Fair"),
        (30, "Fair"),
        (29, "Poor"),
    ])
    def test_interpretation_boundaries(self, score, prefix):
        assert interpret_score(score).startswith(prefix)


class TestClassifyAll:
    def test_ordered_by_score_then_name(self):
        profiles = {
            "Beta": profile("Beta", eager_loading_count=40),
            "Alpha": profile("Alpha", eager_loading_count=40),
            "Gamma": profile("Gamma", eager_loading_count=100),
            "Delta": profile("Delta", eager_loading_count=5),
        }
        candidates = Classifier().classify_all(profiles, scorer_for(profiles))
        assert [c.primary_entity for c in candidates] == ["Gamma", "Alpha", "Beta"]
        assert [c.score for c in candidates] == [100, 40, 40]

    def test_candidate_fields(self):
        p = profile(
            eager_loading_count=60,
            always_loaded_with=["B"],
            related_entities={"B": Cardinality.ONE_TO_MANY},
            production_execution_count=1500,
            co_accessed_entities={"B": 800},
        )
        profiles = {"A": p, "B": profile("B")}
        candidate = Classifier().classify(p, profiles, scorer_for(profiles))
        # eager 60 + always 10 + executions 15 + co-access 10
        assert candidate.score == 95
        assert candidate.related_entities == ("B",)
        assert candidate.recommended_target is NoSQLTarget.DYNAMODB
        assert candidate.complexity is MigrationComplexity.LOW
        assert candidate.priority == "good"
        assert "High frequency eager loading (60 occurrences)" in candidate.reason
        assert "High production execution volume (1500 executions)" in candidate.reason
        assert "Co-accessed in production with: B (800)" in candidate.reason


class TestGraphRouting:
    def test_unloaded_many_to_many_partner_is_graph(self):
        post = profile(
            "Post",
            eager_loading_count=100,
            always_loaded_with=["Comment"],
            related_entities={"Comment": Cardinality.ONE_TO_MANY, "Tag": M2M},
        )
        profiles = {"Post": post, "Comment": profile("Comment"), "Tag": profile("Tag")}
        candidate = Classifier().classify(post, profiles, scorer_for(profiles))
        assert candidate.related_entities == ("Comment",)
        # eager 100 + always 10 - many-to-many 10
        assert candidate.score == 100
        assert candidate.recommended_target is NoSQLTarget.NEPTUNE
