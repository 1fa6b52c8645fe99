"""Translation call sites in JavaScript code."""

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

import esprima
import structlog
from esprima.error_handler import Error as EsprimaError

from ..errors import ParseError

logger = structlog.get_logger(__name__)

# global-style `$t('key')` and instance-style `this.$t('key')` / `i18n.t('key')`
TRANSLATION_FUNCTIONS = frozenset({"$t", "t", "$tc", "tc", "$te", "te"})


@dataclass(frozen=True)
class KeyReference:
    """A literal key at a translation call site (1-based line, 0-based column)."""
    key: str
    line: int
    column: int


def _callee_name(callee: Any) -> Optional[str]:
    if callee.type == "Identifier":
        return callee.name
    if callee.type == "MemberExpression" and not callee.computed and callee.property.type == "Identifier":
        return callee.property.name
    return None


def string_literal(node: Any) -> Optional[Any]:
    """`node` if it is a string literal, else None."""
    if node is not None and node.type == "Literal" and isinstance(node.value, str):
        return node
    return None


def translation_key_literal(call: Any) -> Optional[Any]:
    """First-argument string literal of a translation call.

    Calls passing an identifier or any other expression yield None: such keys
    cannot be known statically.
    """
    if _callee_name(call.callee) not in TRANSLATION_FUNCTIONS:
        return None
    if not call.arguments:
        return None
    return string_literal(call.arguments[0])


class TranslationCallCollector:
    """esprima delegate gathering key references from one code fragment.

    `line`/`column` give the position of the fragment's first character in the
    enclosing file; `wrapped` means one opening parenthesis was prepended.
    """

    def __init__(self, line: int = 1, column: int = 0, wrapped: bool = False):
        self.line = line
        self.column = column
        self.wrapped = wrapped
        self.references: List[KeyReference] = []

    def __call__(self, node: Any, metadata: Any = None) -> Any:
        if node.type == "CallExpression":
            literal = translation_key_literal(node)
            if literal is not None:
                self.references.append(self.locate(literal))
        return node

    def locate(self, literal: Any) -> KeyReference:
        start = literal.loc.start
        if start.line == 1:
            column = self.column + start.column - (1 if self.wrapped else 0)
        else:
            column = start.column
        return KeyReference(key=literal.value, line=self.line + start.line - 1, column=column)


def _parse_error(e: EsprimaError, filename: Optional[str], line: int) -> ParseError:
    line_number = getattr(e, "lineNumber", None)
    return ParseError(
        f"Cannot parse {filename or '<script>'}: {getattr(e, 'description', None) or e}",
        filename=filename,
        line=line + line_number - 1 if line_number else None,
        column=getattr(e, "column", None),
        previous_error=e,
    )


def extract_from_script(
    code: str,
    line: int = 1,
    column: int = 0,
    filename: Optional[str] = None,
) -> List[KeyReference]:
    """Key references of a script, parsed as an ES module first, then as a plain script."""
    collector = TranslationCallCollector(line, column)
    try:
        esprima.parseModule(code, {"loc": True}, collector)
        return collector.references
    except EsprimaError:
        logger.debug("Module parse failed, retrying as script", file=filename)

    collector = TranslationCallCollector(line, column)
    try:
        esprima.parseScript(code, {"loc": True}, collector)
    except EsprimaError as e:
        raise _parse_error(e, filename, line) from e
    return collector.references


def parse_template_expression(
    expression: str,
    line: int,
    column: int,
    filename: Optional[str] = None,
) -> Tuple[Optional[Any], TranslationCallCollector]:
    """Parse a template expression (mustache or directive value).

    Returns the expression node (None when the value only parses as a
    statement list, e.g. `a(); b()` in an event handler) and the collector
    holding the translation calls found in it.
    """
    collector = TranslationCallCollector(line, column, wrapped=True)
    try:
        program = esprima.parseScript(f"({expression}\n)", {"loc": True}, collector)
        return program.body[0].expression, collector
    except EsprimaError:
        pass

    collector = TranslationCallCollector(line, column)
    try:
        esprima.parseScript(expression, {"loc": True}, collector)
    except EsprimaError as e:
        raise _parse_error(e, filename, line) from e
    return None, collector
