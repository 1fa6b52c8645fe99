"""Key references in Vue single-file components.

BeautifulSoup locates the top-level blocks and every template element;
attribute values and mustaches are then read from the raw text so that each
reference keeps its exact position.
"""

import bisect
import re
from typing import Any, List, Optional, Tuple

import structlog
from bs4 import BeautifulSoup
from bs4.element import Tag

from ..errors import ParseError
from .script import (
    KeyReference,
    extract_from_script,
    parse_template_expression,
    string_literal,
)

logger = structlog.get_logger(__name__)

MUSTACHE_PATTERN = re.compile(r"\{\{(.*?)\}\}", re.DOTALL)
ATTRIBUTE_PATTERN = re.compile(
    r"""(?P<name>[^\s"'>/=]+)(?:\s*=\s*(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)'|(?P<uq>[^\s"'=<>`]+)))?"""
)
V_FOR_PATTERN = re.compile(r"^(?P<alias>.*?)\s+(?:in|of)\s+(?P<source>.*)$", re.DOTALL)

I18N_COMPONENTS = frozenset({"i18n", "i18n-t"})
I18N_PATH_ATTRIBUTES = frozenset({"path", "keypath"})
NON_EXPRESSION_DIRECTIVES = frozenset({"v-slot", "v-else", "v-pre", "v-cloak", "v-once"})


class _SourceText:
    """Offset <-> (line, column) conversion for one file."""

    def __init__(self, text: str):
        self.text = text
        self.line_starts = [0] + [m.end() for m in re.finditer(r"\n", text)]

    def offset(self, line: int, column: int) -> int:
        return self.line_starts[line - 1] + column

    def position(self, offset: int) -> Tuple[int, int]:
        index = bisect.bisect_right(self.line_starts, offset) - 1
        return index + 1, offset - self.line_starts[index]

    def start_tag_end(self, offset: int) -> int:
        """Offset just past the `>` closing the start tag at `offset`."""
        quote = None
        for i in range(offset, len(self.text)):
            char = self.text[i]
            if quote:
                if char == quote:
                    quote = None
            elif char in "\"'":
                quote = char
            elif char == ">":
                return i + 1
        return len(self.text)

    def tag_offset(self, tag: Tag) -> int:
        return self.offset(tag.sourceline, tag.sourcepos)


def _iter_attributes(start_tag: str, base_offset: int):
    """Yield `(name, value, value_offset)` for each attribute of a raw start tag."""
    name_match = re.match(r"<\s*[^\s/>]+", start_tag)
    position = name_match.end() if name_match else 1
    for match in ATTRIBUTE_PATTERN.finditer(start_tag, position):
        for group in ("dq", "sq", "uq"):
            if match.group(group) is not None:
                yield match.group("name"), match.group(group), base_offset + match.start(group)
                break
        else:
            yield match.group("name"), None, None


def _is_expression_attribute(name: str) -> bool:
    if name.split(":")[0].split(".")[0] in NON_EXPRESSION_DIRECTIVES or name.startswith("#"):
        return False
    return name.startswith((":", "@", "v-"))


class VueKeyExtractor:
    """Collects key references from one `.vue` file."""

    def __init__(self, text: str, filename: Optional[str] = None):
        self.source = _SourceText(text)
        self.filename = filename
        self.references: List[KeyReference] = []

    def extract(self) -> List[KeyReference]:
        soup = BeautifulSoup(self.source.text, "html.parser")
        blocks = [child for child in soup.children if isinstance(child, Tag)]
        for index, block in enumerate(blocks):
            if block.name == "script":
                self._extract_script(block)
            elif block.name == "template":
                next_block = blocks[index + 1] if index + 1 < len(blocks) else None
                self._extract_template(block, next_block)
        return self.references

    def _extract_script(self, block: Tag) -> None:
        body_start = self.source.start_tag_end(self.source.tag_offset(block))
        body_end = self.source.text.find("</script", body_start)
        if body_end < 0:
            body_end = len(self.source.text)
        line, column = self.source.position(body_start)
        self.references.extend(
            extract_from_script(self.source.text[body_start:body_end], line, column, self.filename)
        )

    def _extract_template(self, block: Tag, next_block: Optional[Tag]) -> None:
        body_start = self.source.start_tag_end(self.source.tag_offset(block))
        region_end = self.source.tag_offset(next_block) if next_block is not None else len(self.source.text)
        body_end = self.source.text.rfind("</template", body_start, region_end)
        if body_end < 0:
            body_end = region_end

        start_tags: List[Tuple[int, int]] = []
        for element in block.find_all(True):
            start_tags.append(self._extract_element(element))
        start_tags.sort()
        tag_starts = [start for start, _ in start_tags]

        for match in MUSTACHE_PATTERN.finditer(self.source.text, body_start, body_end):
            # attribute values are not interpolated
            index = bisect.bisect_right(tag_starts, match.start()) - 1
            if index >= 0 and match.start() < start_tags[index][1]:
                continue
            self._extract_expression(match.group(1), match.start(1))

    def _extract_element(self, element: Tag) -> Tuple[int, int]:
        """Extract from the start tag of `element` and return its offset range."""
        start = self.source.tag_offset(element)
        end = self.source.start_tag_end(start)
        start_tag = self.source.text[start:end]
        for name, value, value_offset in _iter_attributes(start_tag, start):
            if value is None:
                continue
            if element.name in I18N_COMPONENTS and name in I18N_PATH_ATTRIBUTES:
                line, column = self.source.position(value_offset)
                self.references.append(KeyReference(key=value, line=line, column=column))
            elif element.name in I18N_COMPONENTS and name.lstrip(":").replace("v-bind:", "") in I18N_PATH_ATTRIBUTES:
                self._extract_expression(value, value_offset, literal_is_key=True)
            elif name == "v-t":
                self._extract_expression(value, value_offset, literal_is_key=True)
            elif name == "v-for":
                match = V_FOR_PATTERN.match(value)
                if match:
                    self._extract_expression(match.group("source"), value_offset + match.start("source"))
            elif _is_expression_attribute(name):
                self._extract_expression(value, value_offset)
        return start, end

    def _extract_expression(self, expression: str, offset: int, literal_is_key: bool = False) -> None:
        line, column = self.source.position(offset)
        try:
            node, collector = parse_template_expression(expression, line, column, self.filename)
        except ParseError as e:
            logger.debug("Skipping unparseable template expression", file=self.filename, error=e.message)
            return
        self.references.extend(collector.references)
        if literal_is_key and node is not None:
            literal = _directive_key_literal(node)
            if literal is not None:
                self.references.append(collector.locate(literal))


def _directive_key_literal(node: Any) -> Optional[Any]:
    """Key literal of `v-t="'key'"`, `v-t="{path: 'key'}"` or `:path="'key'"`."""
    if node.type == "ObjectExpression":
        for prop in node.properties:
            if prop.type != "Property" or prop.computed:
                continue
            key = prop.key
            name = key.name if key.type == "Identifier" else getattr(key, "value", None)
            if name == "path":
                return string_literal(prop.value)
        return None
    return string_literal(node)


def extract_from_vue(text: str, filename: Optional[str] = None) -> List[KeyReference]:
    return VueKeyExtractor(text, filename).extract()
