# ==============================================
# TOPIC 3: Persistence
# ==============================================
#
# JSON input bundles in, JSON analysis results out.
#
# Modules:
# --------
# - bundle_store.py → BundleStore, AnalysisInputs
#
# ==============================================

from .bundle_store import BundleStore, AnalysisInputs

__all__ = ["BundleStore", "AnalysisInputs"]
