# ==============================================
# Errors
# ==============================================
#
# Only configuration problems are fatal. Everything else the
# analyzer meets (unknown aliases, bad overrides) is logged and
# skipped, so the hierarchy stays small.
#
# ==============================================


class AdenError(Exception):
    """Base class for all errors raised by the analyzer."""


class ConfigurationError(AdenError, ValueError):
    """Raised when threshold configuration cannot be resolved (e.g. unknown profile)."""


class InputBundleError(AdenError):
    """Raised when a JSON input bundle is unreadable or missing required sections."""
