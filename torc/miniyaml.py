"""A small YAML subset parser: maps, lists, plain and block scalars.

Supported forms::

    key: value
    key:
      nested_key: value
    key:
      - list item
    key: |
      multi-line block scalar

Anchors, aliases, flow style, tags and complex keys are not supported;
flow text such as ``[]`` is kept as a plain scalar. Nodes are returned as
``str``, ``list`` and ``dict``; when a map repeats a key the first wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

Node = Union[str, list, dict]


class YamlError(ValueError):
    """Raised for input the parser cannot accept."""

    def __init__(self, line, message):
        super().__init__(f"line {line}: {message}")
        self.line = line
        self.message = message


@dataclass(frozen=True)
class _Line:
    indent: int
    content: str
    number: int


def _tokenize(text):
    lines = []
    for number, raw in enumerate(text.split("\n"), start=1):
        content = raw.lstrip(" ")
        if not content or content.startswith("#"):
            continue
        lines.append(_Line(len(raw) - len(content), content, number))
    return lines


def _split_key(content, colon):
    return content[:colon], content[colon + 1 :].lstrip(" ")


class _Parser:
    def __init__(self, lines):
        self._lines = lines
        self._pos = 0

    def _at_end(self):
        return self._pos >= len(self._lines)

    def _peek(self):
        return self._lines[self._pos]

    def parse_node(self, min_indent):
        if self._at_end():
            return ""
        line = self._peek()
        if line.indent < min_indent:
            return ""
        if line.content.startswith("- "):
            return self._parse_list(line.indent)
        if ":" in line.content:
            return self._parse_map(line.indent)
        self._pos += 1
        return line.content

    def _parse_list(self, base):
        items = []
        while (
            not self._at_end()
            and self._peek().indent == base
            and self._peek().content.startswith("- ")
        ):
            item = self._peek().content[2:]
            self._pos += 1
            colon = item.find(":")
            if colon >= 0:
                items.append(self._parse_list_map(base, *_split_key(item, colon)))
            elif not self._at_end() and self._peek().indent > base:
                items.append(self.parse_node(self._peek().indent))
            else:
                items.append(item)
        return items

    def _parse_list_map(self, base, key, value):
        mapping = {}
        if value == "|":
            node = self._parse_block_scalar(base + 4)
        elif not value and not self._at_end() and self._peek().indent > base:
            node = self.parse_node(self._peek().indent)
        else:
            node = value
        mapping.setdefault(key, node)

        while not self._at_end() and self._peek().indent > base:
            line = self._peek()
            colon = line.content.find(":")
            if colon < 0:
                self._pos += 1
                continue
            nkey, nvalue = _split_key(line.content, colon)
            self._pos += 1
            if nvalue == "|":
                node = self._parse_block_scalar(line.indent + 2)
            elif not nvalue:
                if not self._at_end() and self._peek().indent > line.indent:
                    node = self.parse_node(self._peek().indent)
                else:
                    node = ""
            else:
                node = nvalue
            mapping.setdefault(nkey, node)
        return mapping

    def _parse_map(self, base):
        mapping = {}
        while not self._at_end() and self._peek().indent == base:
            line = self._peek()
            colon = line.content.find(":")
            if colon < 0:
                break
            key, rest = _split_key(line.content, colon)
            self._pos += 1
            if rest == "|":
                node = self._parse_block_scalar(base + 2)
            elif not rest:
                node = self.parse_node(base + 2)
            else:
                node = rest
            mapping.setdefault(key, node)
        return mapping

    def _parse_block_scalar(self, min_indent):
        parts = []
        while not self._at_end() and self._peek().indent >= min_indent:
            parts.append(self._peek().content)
            self._pos += 1
        return "\n".join(parts)


def parse(text):
    """Parse *text* and return the root node (``str``, ``list`` or ``dict``)."""
    return _Parser(_tokenize(text)).parse_node(0)