import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..analysis.decision import AnalysisResult
from ..errors import InputBundleError
from ..model import DatabaseSchema, EntityModel, QueryPattern, QueryStoreAnalysis

logger = logging.getLogger(__name__)


# ==============================================
# BundleStore
# ==============================================
#
# PURPOSE:
#   Read the JSON input bundle the collaborators produce and write
#   the analysis result back out. The analysis core never touches
#   files; this is the only module that does.
#
# BUNDLE FORMAT:
#   {
#     "entities":      [EntityModel, ...],          (required)
#     "queryPatterns": [QueryPattern, ...],
#     "schema":        {"tables": [...], "relationships": [...]},
#     "aliases":       {"Customers": "Customer", ...},
#     "queryStore":    {"queries": [...], "tableCombinations": [...]}  (optional)
#   }
#   snake_case keys ("query_patterns", "query_store") are accepted too.
#
@dataclass
class AnalysisInputs:
    """Everything PatternAnalyzer.analyze() needs, loaded from one bundle."""
    entities: List[EntityModel] = field(default_factory=list)
    query_patterns: List[QueryPattern] = field(default_factory=list)
    schema: DatabaseSchema = field(default_factory=DatabaseSchema)
    aliases: Dict[str, str] = field(default_factory=dict)
    query_store: Optional[QueryStoreAnalysis] = None


class BundleStore:
    """
    Handles reading input bundles and writing results.
    """

    def load_inputs(self, path: Union[str, Path]) -> AnalysisInputs:
        """
        Load an input bundle from disk.

        Args:
            path: Path to the bundle JSON file

        Returns:
            AnalysisInputs

        Raises:
            InputBundleError: if the file is unreadable, is not JSON,
                              lacks "entities", or holds malformed records
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise InputBundleError(f"Cannot read input bundle {path}: {e}") from e
        except ValueError as e:
            raise InputBundleError(f"Input bundle {path} is not valid JSON: {e}") from e

        inputs = self.parse_inputs(data, source=str(path))
        logger.info(
            "Loaded %d entities and %d query patterns from %s",
            len(inputs.entities), len(inputs.query_patterns), path,
        )
        return inputs

    def parse_inputs(self, data: Any, source: str = "<bundle>") -> AnalysisInputs:
        """Build AnalysisInputs from an already-decoded bundle."""
        if not isinstance(data, dict) or "entities" not in data:
            raise InputBundleError(f"Input bundle {source} has no 'entities' section")

        def section(snake: str, camel: str, default: Any) -> Any:
            value = data.get(camel, data.get(snake))
            return default if value is None else value

        query_store = section("query_store", "queryStore", None)
        try:
            return AnalysisInputs(
                entities=[EntityModel.from_dict(e) for e in data["entities"]],
                query_patterns=[QueryPattern.from_dict(p) for p in section("query_patterns", "queryPatterns", [])],
                schema=DatabaseSchema.from_dict(section("schema", "schema", {})),
                aliases=dict(section("aliases", "aliases", {})),
                query_store=QueryStoreAnalysis.from_dict(query_store) if query_store is not None else None,
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise InputBundleError(f"Malformed record in input bundle {source}: {e}") from e

    def save_result(self, result: AnalysisResult, path: Union[str, Path]) -> Path:
        """
        Save an analysis result as indented JSON.

        Args:
            result: The analysis result
            path: Output file path (parent directories are created)

        Returns:
            The written path
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(result.to_dict(), f, indent=2)

        logger.info("Saved %d candidates to %s", len(result.candidates), path)
        return path
