# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence

from .delimiters import Delimiter, header_delimiter
from .syntax import (
    ARRAY_HEADER,
    ARRAY_NODE_TYPES,
    FIELD_LIST,
    TABULAR_ROW,
    SyntaxNodeLike,
    is_list_item,
)

logger = logging.getLogger(__name__)


@dataclass
class TabularRegion:
    """문서 안의 tabular 배열 한 개 (헤더 + 본문).

    `start_line`/`end_line`은 반열린 구간, `row_lines`는 데이터 행의 줄 번호(오름차순).
    편집 후에는 줄 번호가 바뀌므로 캐시하지 말고 매번 다시 찾아야 합니다.
    """
    start_line: int
    end_line: int
    delimiter: Delimiter = Delimiter.COMMA
    declared_field_count: Optional[int] = None
    row_lines: List[int] = field(default_factory=list)


def locate_regions(root: Optional[SyntaxNodeLike], lines: Sequence[str]) -> List[TabularRegion]:
    """구문 트리에서 행이 하나 이상 있는 tabular 배열을 문서 순서대로 찾습니다.

    트리가 없으면(파서 미지원) 빈 리스트를 반환합니다.
    """
    if root is None:
        return []
    regions = [r for r in (_region_for(node, lines) for node in _array_nodes(root)) if r is not None]
    regions.sort(key=lambda r: r.start_line)
    logger.debug("located %d tabular regions", len(regions))
    return regions


def declared_field_count(field_list: SyntaxNodeLike) -> int:
    """필드 목록 노드에서 필드 수를 구합니다.

    자식이 `field, delimiter, field, ...`로 번갈아 나오는 트리 모양을 전제로 합니다.
    다른 파서를 붙일 때는 그 파서의 field_list 자식 구성을 보고 다시 맞춰야 합니다.
    """
    n = len(field_list.children)
    if n == 0:
        return 0
    return n // 2 + 1


# ---------------- Traversal ----------------
def _array_nodes(node: SyntaxNodeLike) -> Iterator[SyntaxNodeLike]:
    if node.type in ARRAY_NODE_TYPES:
        yield node
    for child in node.children:
        yield from _array_nodes(child)


def _own_rows(node: SyntaxNodeLike) -> Iterator[SyntaxNodeLike]:
    # 중첩 배열의 행은 그 배열의 region에 속함
    for child in node.children:
        if child.type == TABULAR_ROW:
            yield child
        elif child.type not in ARRAY_NODE_TYPES:
            yield from _own_rows(child)


def _find_child(node: SyntaxNodeLike, node_type: str) -> Optional[SyntaxNodeLike]:
    for child in node.children:
        if child.type == node_type:
            return child
    return None


def _end_line(node: SyntaxNodeLike) -> int:
    row, col = node.end_point
    return row + 1 if col > 0 else row


def _region_for(node: SyntaxNodeLike, lines: Sequence[str]) -> Optional[TabularRegion]:
    start = node.start_point[0]
    end = max(_end_line(node), start + 1)

    row_lines = sorted({
        row.start_point[0]
        for row in _own_rows(node)
        if start <= row.start_point[0] < end and _is_data_row(lines, row.start_point[0])
    })
    if not row_lines:
        return None

    region = TabularRegion(start_line=start, end_line=end, row_lines=row_lines)

    header = _find_child(node, ARRAY_HEADER)
    header_row = header.start_point[0] if header is not None else start
    header_line = lines[header_row] if header_row < len(lines) else ""
    region.delimiter = header_delimiter(header_line)

    if header is not None:
        field_list = _find_child(header, FIELD_LIST)
        if field_list is not None:
            region.declared_field_count = declared_field_count(field_list)
    return region


def _is_data_row(lines: Sequence[str], idx: int) -> bool:
    if idx >= len(lines):
        return False
    stripped = lines[idx].strip()
    return stripped != "" and not is_list_item(stripped)
