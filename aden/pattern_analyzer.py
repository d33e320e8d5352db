# ==============================================
# PatternAnalyzer: Orchestrator
# ==============================================
#
# PURPOSE:
#   This is the MAIN CLASS that ties the analysis stages together
#   into a single pass. Callers interact with this class only.
#
# HOW IT CONNECTS THE STAGES:
#
#   ┌──────────────────────────────────────────────────────────┐
#   │                     PatternAnalyzer                      │
#   │                                                          │
#   │   MigrationThresholds (resolved before the run)          │
#   │                 │                                        │
#   │                 ▼                                        │
#   │   AnalysisContext: one EntityUsageProfile per entity     │
#   │                 │                                        │
#   │                 ▼                                        │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ RelationshipFusion                           │        │
#   │  │  schema + navigation + query joins           │        │
#   │  └──────────────┬───────────────────────────────┘        │
#   │                 ▼                                        │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ ProductionMetricsAttributor                  │        │
#   │  │  combinations → executions, co-access        │        │
#   │  └──────────────┬───────────────────────────────┘        │
#   │                 ▼                                        │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ UsageProfileBuilder                          │        │
#   │  │  patterns → eager, reads/writes, always-with │        │
#   │  └──────────────┬───────────────────────────────┘        │
#   │                 ▼           (profiles read-only from here)│
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ Classifier + ComplexityScorer                │        │
#   │  │  → DenormalizationCandidates                 │        │
#   │  └──────────────────────────────────────────────┘        │
#   └──────────────────────────────────────────────────────────┘
#
# CLASSES:
# --------
# - AnalysisContext (dataclass)
#     Per-run state: thresholds, name resolver, profiles, warnings.
#     Created fresh by every analyze() call; never shared.
#
# - PatternAnalyzer
#     - __init__(thresholds: MigrationThresholds | None = None)
#     - analyze(entities, query_patterns, schema, aliases, query_store) -> AnalysisResult
#     - analyze_inputs(inputs: AnalysisInputs) -> AnalysisResult
#
# ==============================================

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional

from .analysis import (
    AnalysisResult,
    Classifier,
    ComplexityScorer,
    EntityNameResolver,
    EntityUsageProfile,
    ProductionMetricsAttributor,
    RelationshipFusion,
    UsageProfileBuilder,
)
from .model import DatabaseSchema, EntityModel, QueryPattern, QueryStoreAnalysis
from .persistence import AnalysisInputs
from .thresholds import MigrationThresholds

logger = logging.getLogger(__name__)


@dataclass
class AnalysisContext:
    """State for exactly one analysis run."""
    thresholds: MigrationThresholds
    resolver: EntityNameResolver
    profiles: Dict[str, EntityUsageProfile] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        thresholds: MigrationThresholds,
        entities: List[EntityModel],
        aliases: Optional[Mapping[str, str]] = None,
    ) -> "AnalysisContext":
        context = cls(thresholds=thresholds, resolver=EntityNameResolver(entities, aliases))
        for entity in entities:
            if entity.class_name in context.profiles:
                context.warn(f"Duplicate entity {entity.class_name}; keeping the first definition")
                continue
            context.profiles[entity.class_name] = EntityUsageProfile(entity=entity)
        return context

    def warn(self, message: str) -> None:
        logger.warning(message)
        self.warnings.append(message)


class PatternAnalyzer:
    """
    Runs fusion, attribution, profiling and scoring in one pass.
    """

    def __init__(self, thresholds: Optional[MigrationThresholds] = None):
        """
        Args:
            thresholds: Resolved thresholds. If not provided, the
                        balanced defaults are used.
        """
        self.thresholds = thresholds or MigrationThresholds()

    def analyze(
        self,
        entities: Iterable[EntityModel],
        query_patterns: Iterable[QueryPattern],
        schema: Optional[DatabaseSchema] = None,
        aliases: Optional[Mapping[str, str]] = None,
        query_store: Optional[QueryStoreAnalysis] = None,
    ) -> AnalysisResult:
        """
        Analyze one application.

        Args:
            entities: Entities from the model parser
            query_patterns: Patterns from the query analyzer
            schema: Declared database schema
            aliases: DB-set alias → canonical entity name
            query_store: Optional production telemetry

        Returns:
            AnalysisResult with ranked candidates and the evidence
        """
        entities = list(entities)
        query_patterns = list(query_patterns)
        schema = schema or DatabaseSchema()

        logger.info(
            "Analyzing %d entities, %d query patterns with %s",
            len(entities), len(query_patterns), self.thresholds.configuration_summary(),
        )
        context = AnalysisContext.create(self.thresholds, entities, aliases)

        # Step 1: Fuse relationships
        fusion = RelationshipFusion(context.resolver).fuse(entities, schema.relationships, query_patterns)
        context.warnings.extend(fusion.warnings)

        builder = UsageProfileBuilder(context.resolver, context.thresholds, context.profiles)
        builder.apply_relationships(fusion)

        # Step 2: Production telemetry
        attributor = ProductionMetricsAttributor(context.resolver, context.profiles)
        attributor.attribute(query_store)
        context.warnings.extend(attributor.warnings)

        # Step 3: Query patterns
        builder.analyze_patterns(query_patterns)
        context.warnings.extend(builder.warnings)

        # Step 4: Score (profiles are read-only from here on)
        complexity = ComplexityScorer(context.resolver, schema, context.thresholds)
        candidates = Classifier(context.thresholds).classify_all(context.profiles, complexity)
        complexity_analysis = complexity.analyze(entities, context.profiles)

        max_frequency = max((p.frequency for p in query_patterns), default=0)
        context.thresholds.suggest_adjustments(len(entities), len(query_patterns), max_frequency)

        return AnalysisResult(
            candidates=candidates,
            usage_profiles=context.profiles,
            query_patterns=query_patterns,
            complexity_analysis=complexity_analysis,
            schema_only_relationships=fusion.schema_only,
            warnings=context.warnings,
            thresholds=context.thresholds,
        )

    def analyze_inputs(self, inputs: AnalysisInputs) -> AnalysisResult:
        return self.analyze(
            inputs.entities,
            inputs.query_patterns,
            inputs.schema,
            inputs.aliases,
            inputs.query_store,
        )
