"""Map dotted key paths back to token positions in locale JSON text."""

import json
from enum import Enum
from typing import Any, Iterable, Iterator, List, Optional, Tuple

import esprima
import structlog
from esprima.error_handler import Error as EsprimaError

from ..errors import ParseError
from ..reporting import SourceLocation
from .nodes import (
    JsonArray,
    JsonIdentifier,
    JsonLiteral,
    JsonObject,
    JsonProperty,
    JsonValueNode,
)

logger = structlog.get_logger(__name__)


class LocateTarget(str, Enum):
    KEY = "key"
    VALUE = "value"


def _location(es_node: Any) -> SourceLocation:
    start = es_node.loc.start
    # the text is wrapped in one opening parenthesis before parsing
    column = start.column - 1 if start.line == 1 else start.column
    return SourceLocation(line=start.line, column=column)


def _convert(es_node: Any) -> JsonValueNode:
    node_type = es_node.type
    if node_type == "ObjectExpression":
        children: List[JsonProperty] = []
        for prop in es_node.properties:
            key = JsonIdentifier(value=str(prop.key.value), loc=_location(prop.key))
            children.append(JsonProperty(key=key, value=_convert(prop.value), loc=_location(prop)))
        return JsonObject(children=children, loc=_location(es_node))
    if node_type == "ArrayExpression":
        return JsonArray(children=[_convert(e) for e in es_node.elements], loc=_location(es_node))
    if node_type == "Literal":
        return JsonLiteral(value=es_node.value, raw=es_node.raw, loc=_location(es_node))
    if node_type == "UnaryExpression" and es_node.operator == "-":
        inner = _convert(es_node.argument)
        if isinstance(inner, JsonLiteral):
            return JsonLiteral(value=-inner.value, raw=f"-{inner.raw}", loc=_location(es_node))
    if node_type == "Identifier" and es_node.name in ("NaN", "Infinity"):
        return JsonLiteral(value=float(es_node.name), raw=es_node.name, loc=_location(es_node))
    raise ParseError(f"Unexpected {node_type} in JSON document")


def parse_json_ast(text: str, filename: Optional[str] = None) -> Optional[JsonValueNode]:
    """Parse JSON text into a position-aware tree.

    Returns None for text that is not JSON; the failure is logged, not raised.
    """
    try:
        json.loads(text)
        # esprima rejects raw U+2028/U+2029; a same-length replacement keeps offsets
        source = text.replace("\u2028", " ").replace("\u2029", " ")
        program = esprima.parseScript(f"({source}\n)", {"loc": True})
        return _convert(program.body[0].expression)
    except (ValueError, EsprimaError, ParseError) as e:
        logger.warning("Cannot build JSON AST", file=filename, error=str(e))
        return None


def _find_property(node: JsonObject, name: str) -> Optional[JsonProperty]:
    found = None
    for child in node.children:
        if child.key.value == name:
            # the last duplicate wins, as in json.loads
            found = child
    return found


def resolve(
    ast: Optional[JsonValueNode],
    key_path: str,
    target: LocateTarget = LocateTarget.KEY,
) -> Optional[SourceLocation]:
    """Location of the property key (or value) addressed by `key_path`.

    A segment that cannot be matched ends the lookup with None.
    """
    segments = key_path.split(".")
    node = ast
    for index, segment in enumerate(segments):
        if not isinstance(node, JsonObject):
            return None
        prop = _find_property(node, segment)
        if prop is None:
            return None
        remaining = index < len(segments) - 1
        if remaining and isinstance(prop.value, JsonObject):
            node = prop.value
            continue
        return prop.key.loc if target is LocateTarget.KEY else prop.value.loc
    return None


def locate_keys(
    ast: Optional[JsonValueNode],
    key_paths: Iterable[str],
    target: LocateTarget = LocateTarget.KEY,
) -> Iterator[Tuple[str, SourceLocation]]:
    """Yield `(key_path, location)` for every path that resolves."""
    for key_path in key_paths:
        location = resolve(ast, key_path, target)
        if location is None:
            logger.debug("Key path not found in JSON AST", key_path=key_path)
            continue
        yield key_path, location
