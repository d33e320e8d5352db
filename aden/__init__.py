# ==============================================
# aden: Denormalization Pattern Analyzer
# ==============================================
#
# Package Structure (model + 3 topics + orchestrator):
#
# aden/
# ├── model/            # Input records: entities, schema, query patterns
# ├── thresholds/       # Topic 1: Resolve thresholds from profile/files/env/CLI
# ├── analysis/         # Topic 2: Fuse, attribute, profile and score entities
# ├── persistence/      # Topic 3: JSON input bundles and result files
# ├── config.py         # Application configuration (.env / environment)
# ├── errors.py         # Exception hierarchy
# ├── pattern_analyzer.py  # Per-run orchestrator
# └── cli.py            # Command line entry point
#
# ==============================================

__version__ = "0.1.0"
