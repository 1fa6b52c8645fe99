from . import no_missing_keys, no_unused_keys
from .no_missing_keys import check_missing_keys
from .no_unused_keys import check_unused_keys

ALL_RULES = (no_unused_keys.RULE_NAME, no_missing_keys.RULE_NAME)

__all__ = [
    "ALL_RULES",
    "check_missing_keys",
    "check_unused_keys",
]
