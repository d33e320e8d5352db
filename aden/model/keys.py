# ==============================================
# Key helpers for JSON input records
# ==============================================
#
# The collaborators that export entities, schemas and query
# patterns are not consistent about key casing: some emit
# camelCase ("targetEntity"), others snake_case ("target_entity").
# Enum values arrive as "ONE_TO_MANY", "one-to-many" or "OneToMany".
#
# ==============================================

import re
from typing import Any, Dict


def pick(data: Dict[str, Any], snake: str, camel: str, default: Any = None) -> Any:
    """Return data[snake] or data[camel], whichever is present."""
    if snake in data:
        return data[snake]
    if camel in data:
        return data[camel]
    return default


def require(data: Dict[str, Any], snake: str, camel: str) -> Any:
    """Like pick(), but a missing or null value is an error."""
    value = pick(data, snake, camel)
    if value is None:
        raise ValueError(f"missing required field {camel!r}")
    return value


def enum_token(value: str) -> str:
    """
    Convert an enum spelling to UPPER_SNAKE form.

    Examples:
        "one-to-many"    → "ONE_TO_MANY"
        "OneToMany"      → "ONE_TO_MANY"
        "EagerLoading"   → "EAGER_LOADING"
        "SINGLE_ENTITY"  → "SINGLE_ENTITY"
    """
    token = re.sub(r'[^a-zA-Z0-9_]', '_', value.strip())
    token = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1_\2', token)
    token = re.sub(r'([a-z\d])([A-Z])', r'\1_\2', token)
    token = re.sub(r'_+', '_', token).strip('_')
    return token.upper()
