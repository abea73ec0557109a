# -*- coding: utf-8 -*-
"""tabular 배열 열 정렬(align) / 공백 축소(shrink).

두 연산 모두 줄 수를 바꾸지 않고 행의 내용만 다시 씁니다.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from wcwidth import wcswidth

from .delimiters import Delimiter, compact_separator, row_separator
from .regions import TabularRegion, locate_regions
from .rows import split_row
from .syntax import OutlineSyntaxProvider, SyntaxTreeProvider

logger = logging.getLogger(__name__)


class ToonDocument:
    """줄 단위로 수정 가능한 TOON 텍스트."""

    def __init__(self, lines: List[str]):
        self.lines = list(lines)

    @classmethod
    def from_text(cls, text: str) -> "ToonDocument":
        return cls(text.split("\n"))

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def get_line(self, idx: int) -> str:
        return self.lines[idx]

    def set_line(self, idx: int, content: str) -> None:
        self.lines[idx] = content


@dataclass(frozen=True)
class AlignmentReport:
    action: str
    rows: int = 0
    regions: int = 0

    def __str__(self) -> str:
        return f"{self.action} {self.rows} rows in {self.regions} tables"


# ============================================================
# Width helpers
# ============================================================
def display_width(s: str) -> int:
    width = wcswidth(s)
    # 제어 문자가 섞이면 -1
    return width if width >= 0 else len(s)


def _indentation(line: str) -> str:
    return line[: len(line) - len(line.lstrip(" "))]


def _row_values(line: str, delimiter: Delimiter) -> List[str]:
    return [v.strip() for v in split_row(line.lstrip(" "), delimiter)]


def column_widths(lines: List[str], delimiter: Delimiter) -> Dict[int, int]:
    """열 번호(1부터) → 모든 행에서의 최대 표시 폭."""
    widths: Dict[int, int] = {}
    for line in lines:
        for col, value in enumerate(_row_values(line, delimiter), start=1):
            widths[col] = max(widths.get(col, 0), display_width(value))
    return widths


def pad_value(value: str, width: int) -> str:
    padding = width - display_width(value)
    if padding > 0:
        return value + " " * padding
    return value


# ============================================================
# Region operations
# ============================================================
def _check_field_count(region: TabularRegion, line_num: int, values: List[str]) -> None:
    expected = region.declared_field_count
    if expected is not None and len(values) != expected:
        logger.warning(
            "line %d: row has %d values, header declares %d fields", line_num + 1, len(values), expected
        )


def align_region(doc: ToonDocument, region: TabularRegion) -> int:
    """region의 행을 열 폭에 맞춰 패딩합니다. 마지막 열은 패딩하지 않습니다."""
    if not region.row_lines:
        return 0
    delimiter = region.delimiter
    lines = [doc.get_line(n) for n in region.row_lines]
    widths = column_widths(lines, delimiter)
    sep = row_separator(delimiter)

    for line_num, line in zip(region.row_lines, lines):
        values = _row_values(line, delimiter)
        _check_field_count(region, line_num, values)
        last = len(values)
        cells = [
            pad_value(value, widths.get(col, 0)) if col < last else value
            for col, value in enumerate(values, start=1)
        ]
        doc.set_line(line_num, _indentation(line) + sep.join(cells))
    return len(lines)


def shrink_region(doc: ToonDocument, region: TabularRegion) -> int:
    if not region.row_lines:
        return 0
    delimiter = region.delimiter
    sep = compact_separator(delimiter)
    for line_num in region.row_lines:
        line = doc.get_line(line_num)
        values = _row_values(line, delimiter)
        _check_field_count(region, line_num, values)
        doc.set_line(line_num, _indentation(line) + sep.join(values))
    return len(region.row_lines)


# ============================================================
# Buffer operations
# ============================================================
def find_regions(doc: ToonDocument, provider: Optional[SyntaxTreeProvider] = None) -> List[TabularRegion]:
    provider = provider or OutlineSyntaxProvider()
    root = provider.parse(doc.text)
    return locate_regions(root, doc.lines)


def _apply(
    action: str,
    op: Callable[[ToonDocument, TabularRegion], int],
    doc: ToonDocument,
    provider: Optional[SyntaxTreeProvider],
) -> AlignmentReport:
    regions = find_regions(doc, provider)
    # 뒤쪽 region부터 처리해야 앞쪽 region의 줄 번호가 유지됨
    regions.sort(key=lambda r: r.start_line, reverse=True)

    total_rows = 0
    total_regions = 0
    for region in regions:
        if region.row_lines:
            total_rows += op(doc, region)
            total_regions += 1

    report = AlignmentReport(action=action, rows=total_rows, regions=total_regions)
    if total_regions > 0:
        logger.info("%s", report)
    return report


def align_buffer(doc: ToonDocument, provider: Optional[SyntaxTreeProvider] = None) -> AlignmentReport:
    return _apply("Aligned", align_region, doc, provider)


def shrink_buffer(doc: ToonDocument, provider: Optional[SyntaxTreeProvider] = None) -> AlignmentReport:
    return _apply("Shrunk", shrink_region, doc, provider)


def align_text(text: str, provider: Optional[SyntaxTreeProvider] = None) -> str:
    doc = ToonDocument.from_text(text)
    align_buffer(doc, provider)
    return doc.text


def shrink_text(text: str, provider: Optional[SyntaxTreeProvider] = None) -> str:
    doc = ToonDocument.from_text(text)
    shrink_buffer(doc, provider)
    return doc.text
