"""Rule implementations, keyed by rule name."""

from .case import ensure_case
from .library import RULES, RuleDef, check_options

__all__ = ["RULES", "RuleDef", "check_options", "ensure_case"]
