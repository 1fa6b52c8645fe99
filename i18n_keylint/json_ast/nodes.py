"""Position-annotated JSON syntax tree."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Union

from ..reporting import SourceLocation


class NodeType(str, Enum):
    OBJECT = "Object"
    PROPERTY = "Property"
    IDENTIFIER = "Identifier"
    ARRAY = "Array"
    LITERAL = "Literal"


@dataclass
class JsonIdentifier:
    """Property key."""
    value: str
    loc: SourceLocation
    type: NodeType = field(default=NodeType.IDENTIFIER, init=False)


@dataclass
class JsonLiteral:
    value: Any
    raw: str
    loc: SourceLocation
    type: NodeType = field(default=NodeType.LITERAL, init=False)


@dataclass
class JsonArray:
    children: List["JsonValueNode"]
    loc: SourceLocation
    type: NodeType = field(default=NodeType.ARRAY, init=False)


@dataclass
class JsonProperty:
    key: JsonIdentifier
    value: "JsonValueNode"
    loc: SourceLocation
    type: NodeType = field(default=NodeType.PROPERTY, init=False)


@dataclass
class JsonObject:
    children: List[JsonProperty]
    loc: SourceLocation
    type: NodeType = field(default=NodeType.OBJECT, init=False)


JsonValueNode = Union[JsonObject, JsonArray, JsonLiteral]
JsonNode = Union[JsonObject, JsonProperty, JsonIdentifier, JsonArray, JsonLiteral]
