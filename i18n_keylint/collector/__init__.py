from .keys import collect_keys, extract_key_references, iter_source_files
from .script import (
    TRANSLATION_FUNCTIONS,
    KeyReference,
    extract_from_script,
    parse_template_expression,
)
from .vue import extract_from_vue

__all__ = [
    "TRANSLATION_FUNCTIONS",
    "KeyReference",
    "collect_keys",
    "extract_from_script",
    "extract_from_vue",
    "extract_key_references",
    "iter_source_files",
    "parse_template_expression",
]
