# ==============================================
# Decision (Data Classes)
# ==============================================
#
# PURPOSE:
#   Data classes that represent the OUTPUT of the analysis: one
#   DenormalizationCandidate per entity worth migrating, and the
#   AnalysisResult that bundles candidates with the evidence.
#
# WHY THIS FILE EXISTS:
#   Separating data classes from logic keeps the classifier clean.
#   These classes are also used by the persistence layer to write
#   results and by the CLI to print summaries.
#
# ENUMS:
# ------
# - NoSQLTarget(Enum): DYNAMODB, DOCUMENTDB, NEPTUNE
#     Which datastore family fits the entity's relationship topology.
#
# - MigrationComplexity(Enum): LOW (0-30), MEDIUM (31-60), HIGH (61-100)
#     Effort tier; from_score() partitions [0, 100] totally.
#
# CLASSES:
# --------
# - DenormalizationCandidate (frozen dataclass)
#     primary_entity, related_entities, complexity, score, reason,
#     recommended_target, priority
#     score_interpretation → fixed tiers independent of profile
#
# - ComplexityAnalysis (dataclass)
#     Whole-application complexity summary.
#
# - AnalysisResult (dataclass)
#     Everything one run produces.
#
# ==============================================

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..model import QueryPattern, Relationship
from ..thresholds import MigrationThresholds
from .usage_profile import EntityUsageProfile


class NoSQLTarget(Enum):
    """
    Target datastore families.

    - DYNAMODB: key-value, simple fan-out with known access keys
    - DOCUMENTDB: documents that embed their related entities
    - NEPTUNE: graphs, for many-to-many webs
    """
    DYNAMODB = "Amazon DynamoDB"
    DOCUMENTDB = "Amazon DocumentDB"
    NEPTUNE = "Amazon Neptune"

    @property
    def display_name(self) -> str:
        return self.value


class MigrationComplexity(Enum):
    LOW = (0, 30)
    MEDIUM = (31, 60)
    HIGH = (61, 100)

    @property
    def min_score(self) -> int:
        return self.value[0]

    @property
    def max_score(self) -> int:
        return self.value[1]

    @classmethod
    def from_score(cls, score: int) -> "MigrationComplexity":
        """Tier for a complexity score; anything above 60 (or out of range) is HIGH."""
        if score <= cls.LOW.max_score:
            return cls.LOW
        if score <= cls.MEDIUM.max_score:
            return cls.MEDIUM
        return cls.HIGH


# Fixed, profile-independent interpretation of a score.
SCORE_INTERPRETATIONS: List[Tuple[int, str]] = [
    (150, "Excellent candidate - migrate immediately"),
    (100, "Strong candidate - high priority"),
    (60, "Good candidate - medium priority"),
    (30, "Fair candidate - low priority"),
]
RECONSIDER = "Poor candidate - reconsider approach"


def interpret_score(score: int) -> str:
    for floor, label in SCORE_INTERPRETATIONS:
        if score >= floor:
            return label
    return RECONSIDER


@dataclass(frozen=True)
class DenormalizationCandidate:
    """
    An entity judged worth merging with its related entities into a
    single NoSQL record.

    This is what the Classifier produces and what the report layer
    renders.
    """

    # --- Core decision ---
    primary_entity: str
    related_entities: Tuple[str, ...]  # sorted
    score: int
    recommended_target: NoSQLTarget

    # --- Effort ---
    complexity: MigrationComplexity
    complexity_score: int = 0

    # --- Reasoning ---
    reason: str = ""
    priority: str = "reconsider"  # tier label from the active profile

    @property
    def score_interpretation(self) -> str:
        return interpret_score(self.score)

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the candidate for the JSON result.

        Returns:
            A JSON-serializable dictionary representation
        """
        return {
            "primary_entity": self.primary_entity,
            "related_entities": list(self.related_entities),
            "score": self.score,
            "score_interpretation": self.score_interpretation,
            "priority": self.priority,
            "complexity": self.complexity.name,
            "complexity_score": self.complexity_score,
            "recommended_target": self.recommended_target.name,
            "recommended_target_name": self.recommended_target.display_name,
            "reason": self.reason,
        }


@dataclass
class ComplexityAnalysis:
    """Application-wide complexity summary."""
    entity_complexity_scores: Dict[str, int] = field(default_factory=dict)
    overall_complexity: int = 0
    complexity_reason: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entity_complexity_scores": dict(self.entity_complexity_scores),
            "overall_complexity": self.overall_complexity,
            "complexity_reason": self.complexity_reason,
        }


@dataclass
class AnalysisResult:
    """Everything a single analysis run produces."""

    candidates: List[DenormalizationCandidate] = field(default_factory=list)
    usage_profiles: Dict[str, EntityUsageProfile] = field(default_factory=dict)
    query_patterns: List[QueryPattern] = field(default_factory=list)
    complexity_analysis: Optional[ComplexityAnalysis] = None
    schema_only_relationships: List[Relationship] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    thresholds: MigrationThresholds = field(default_factory=MigrationThresholds)

    @property
    def recommended_candidates(self) -> List[DenormalizationCandidate]:
        """Candidates at or above the configured minimum migration score."""
        minimum = self.thresholds.minimum_migration_score
        return [c for c in self.candidates if c.score >= minimum]

    def find_candidate(self, entity_name: str) -> Optional[DenormalizationCandidate]:
        for candidate in self.candidates:
            if candidate.primary_entity == entity_name:
                return candidate
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "thresholds": self.thresholds.to_dict(),
            "candidates": [c.to_dict() for c in self.candidates],
            "recommended_candidates": [c.primary_entity for c in self.recommended_candidates],
            "usage_profiles": {name: p.to_dict() for name, p in sorted(self.usage_profiles.items())},
            "query_patterns": [p.to_dict() for p in self.query_patterns],
            "complexity_analysis": self.complexity_analysis.to_dict() if self.complexity_analysis else None,
            "schema_only_relationships": [r.to_dict() for r in self.schema_only_relationships],
            "warnings": list(self.warnings),
        }
