from .diff import ChangeKind, KeyChange, diff_keys, find_missing_keys, find_unused_keys
from .flatten import PRESENT, build_expected, flatten

__all__ = [
    "PRESENT",
    "ChangeKind",
    "KeyChange",
    "build_expected",
    "diff_keys",
    "find_missing_keys",
    "find_unused_keys",
    "flatten",
]
