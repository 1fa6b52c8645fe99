"""no-unused-keys: locale keys that no source file uses."""

from pathlib import Path
from typing import Iterable, List, Optional, Union

import structlog

from ..engine.diff import find_unused_keys
from ..errors import ErrorContextManager, ParseError
from ..json_ast import locate_keys, parse_json_ast
from ..localization.messages import LocaleMessages
from ..reporting import UNEXPECTED_ERROR_LOCATION, Diagnostic

logger = structlog.get_logger(__name__)

RULE_NAME = "no-unused-keys"


def check_unused_keys(
    filename: Union[str, Path],
    text: str,
    locale_messages: LocaleMessages,
    used_keys: Iterable[str],
    error_context: Optional[ErrorContextManager] = None,
) -> List[Diagnostic]:
    """Report every unused key of one locale file at its property key.

    Malformed JSON yields a single diagnostic at the sentinel location and no
    key findings.
    """
    filename = str(filename)
    if Path(filename).suffix != ".json":
        logger.debug("Ignoring non-JSON file", file=filename, rule=RULE_NAME)
        return []

    locale_message = locale_messages.find_locale_message_for(filename)
    if locale_message is None:
        logger.debug("Ignoring file outside localeDir", file=filename, rule=RULE_NAME)
        return []

    try:
        unused_keys = find_unused_keys(locale_message, text, used_keys)
    except ParseError as e:
        if error_context is not None:
            error_context.record_error(e, {"rule": RULE_NAME})
        return [Diagnostic(RULE_NAME, e.message, UNEXPECTED_ERROR_LOCATION, filename)]

    if not unused_keys:
        return []

    ast = parse_json_ast(text, filename)
    if ast is None:
        return []

    return [
        Diagnostic(RULE_NAME, f"unused '{key_path}' key", location, filename)
        for key_path, location in locate_keys(ast, unused_keys)
    ]
