# -*- coding: utf-8 -*-
"""구문 트리 제공자 인터페이스와 내장 outline 제공자.

정렬 엔진은 `type`, `start_point`, `end_point`, `children` 속성만 사용합니다.
py-tree-sitter의 `Node`도 같은 속성을 가지므로, tree-sitter-toon 문법으로 만든
트리를 그대로 넘길 수 있습니다.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence, Tuple, runtime_checkable

from .delimiters import header_delimiter
from .rows import tokenize_row

Point = Tuple[int, int]

# node type tags (tree-sitter-toon 과 같은 이름)
DOCUMENT = "document"
ARRAY_DECLARATION = "array_declaration"
ROOT_ARRAY = "root_array"
ARRAY_HEADER = "array_header"
FIELD_LIST = "field_list"
FIELD = "field"
DELIMITER = "delimiter"
ARRAY_CONTENT = "array_content"
TABULAR_ROW = "tabular_row"

ARRAY_NODE_TYPES = frozenset({ARRAY_DECLARATION, ROOT_ARRAY})

_ARRAY_HEADER_RE = re.compile(
    r'^(?P<dash>-\s+)?(?P<key>[A-Za-z_][A-Za-z0-9_.]*|"(?:[^"\\]|\\.)*")?'
    r"\[(?P<n>\d+)[|\t]?\]"
    r'(?:\{(?P<fields>(?:[^}"]|"(?:[^"\\]|\\.)*")*)\})?:(?P<rest>.*)$'
)


@runtime_checkable
class SyntaxNodeLike(Protocol):
    type: str
    start_point: Point
    end_point: Point
    children: Sequence["SyntaxNodeLike"]


@runtime_checkable
class SyntaxTreeProvider(Protocol):
    """TOON 원문을 받아 루트 노드를 돌려주는 외부 파서 인터페이스."""
    def parse(self, text: str) -> Optional[SyntaxNodeLike]: ...


@dataclass
class SyntaxNode:
    type: str
    start_point: Point
    end_point: Point
    children: List["SyntaxNode"] = field(default_factory=list)

    @property
    def start_line(self) -> int:
        return self.start_point[0]

    @property
    def end_line(self) -> int:
        return self.end_point[0]


class OutlineSyntaxProvider:
    """배열 구조만 담은 부분 구문 트리를 만드는 내장 제공자.

    전체 TOON 문법 파서가 아닙니다. 배열 헤더와 tabular 행만 노드로 만들고,
    나머지 줄(`key: value` 등)은 트리에 나타나지 않습니다.
    """

    def parse(self, text: str) -> Optional[SyntaxNode]:
        lines = text.split("\n")
        last = len(lines) - 1
        root = SyntaxNode(DOCUMENT, (0, 0), (last, len(lines[last])))
        for i, ln in enumerate(lines):
            node = self._array_node(lines, i)
            if node is not None:
                root.children.append(node)
        return root

    def _array_node(self, lines: List[str], i: int) -> Optional[SyntaxNode]:
        ln = lines[i]
        indent = _count_indent(ln)
        m = _ARRAY_HEADER_RE.match(ln[indent:])
        if not m or m.group("fields") is None or m.group("rest").strip():
            return None

        header = SyntaxNode(ARRAY_HEADER, (i, indent), (i, len(ln)))
        fields_col = indent + m.start("fields")
        header.children.append(self._field_list(ln, i, fields_col, m.group("fields")))

        rows = self._tabular_rows(lines, i + 1, indent)
        end = rows[-1].end_point if rows else header.end_point
        node_type = ARRAY_DECLARATION if m.group("key") else ROOT_ARRAY
        node = SyntaxNode(node_type, (i, indent), end, [header])
        if rows:
            node.children.append(SyntaxNode(ARRAY_CONTENT, rows[0].start_point, end, rows))
        return node

    def _field_list(self, line: str, row: int, col: int, body: str) -> SyntaxNode:
        # {a,b,c} → field "," field "," field (구분자 토큰이 사이에 끼어 있음)
        node = SyntaxNode(FIELD_LIST, (row, col - 1), (row, col + len(body) + 1))
        delimiter = header_delimiter(line)
        tokens = tokenize_row(body, delimiter) if body else []
        for k, tok in enumerate(tokens):
            if k > 0:
                node.children.append(SyntaxNode(DELIMITER, (row, col + tok.start - 1), (row, col + tok.start)))
            node.children.append(SyntaxNode(FIELD, (row, col + tok.start), (row, col + tok.end)))
        return node

    def _tabular_rows(self, lines: List[str], start: int, header_indent: int) -> List[SyntaxNode]:
        """헤더 다음 첫 줄의 들여쓰기를 행 들여쓰기로 보고, 같은 들여쓰기의 줄을 모읍니다."""
        rows: List[SyntaxNode] = []
        row_indent: Optional[int] = None
        j = start
        while j < len(lines):
            ln = lines[j]
            if not ln.strip():
                j += 1
                continue
            indent = _count_indent(ln)
            if row_indent is None:
                if indent <= header_indent:
                    break
                row_indent = indent
            if indent != row_indent or is_list_item(ln):
                break
            rows.append(SyntaxNode(TABULAR_ROW, (j, indent), (j, len(ln))))
            j += 1
        return rows


def is_list_item(line: str) -> bool:
    """`-` 단독 또는 `- `로 시작하는 줄. `-1`, `-abc` 같은 행 값은 해당하지 않습니다."""
    stripped = line.strip()
    return stripped == "-" or stripped.startswith("- ")


def _count_indent(line: str) -> int:
    return len(line) - len(line.lstrip(" "))
