from .locator import LocateTarget, locate_keys, parse_json_ast, resolve
from .nodes import (
    JsonArray,
    JsonIdentifier,
    JsonLiteral,
    JsonNode,
    JsonObject,
    JsonProperty,
    JsonValueNode,
    NodeType,
)

__all__ = [
    "JsonArray",
    "JsonIdentifier",
    "JsonLiteral",
    "JsonNode",
    "JsonObject",
    "JsonProperty",
    "JsonValueNode",
    "LocateTarget",
    "NodeType",
    "locate_keys",
    "parse_json_ast",
    "resolve",
]
