# ==============================================
# TOPIC 2: Analysis
# ==============================================
#
# Fuse relationships, attribute production telemetry, build usage
# profiles and score them.
#
# Modules:
# --------
# - name_resolver.py       → EntityNameResolver (table / alias → entity)
# - relationship_fusion.py → RelationshipFusion (schema + navigation + queries)
# - production_metrics.py  → ProductionMetricsAttributor
# - usage_profile.py       → EntityUsageProfile
# - profile_builder.py     → UsageProfileBuilder
# - complexity.py          → ComplexityScorer
# - classifier.py          → Classifier (score, exclusion, target)
# - decision.py            → NoSQLTarget, MigrationComplexity,
#                            DenormalizationCandidate, AnalysisResult
#
# ==============================================

from .name_resolver import EntityNameResolver
from .relationship_fusion import RelationshipFusion, FusionResult
from .production_metrics import ProductionMetricsAttributor
from .usage_profile import EntityUsageProfile
from .profile_builder import UsageProfileBuilder, AccessKind, ACCESS_KINDS
from .decision import (
    NoSQLTarget,
    MigrationComplexity,
    DenormalizationCandidate,
    ComplexityAnalysis,
    AnalysisResult,
)
from .complexity import ComplexityScorer
from .classifier import Classifier, SCORE_WEIGHTS, CARDINALITY_PENALTY_WEIGHT

__all__ = [
    "EntityNameResolver",
    "RelationshipFusion",
    "FusionResult",
    "ProductionMetricsAttributor",
    "EntityUsageProfile",
    "UsageProfileBuilder",
    "AccessKind",
    "ACCESS_KINDS",
    "NoSQLTarget",
    "MigrationComplexity",
    "DenormalizationCandidate",
    "ComplexityAnalysis",
    "AnalysisResult",
    "ComplexityScorer",
    "Classifier",
    "SCORE_WEIGHTS",
    "CARDINALITY_PENALTY_WEIGHT",
]
