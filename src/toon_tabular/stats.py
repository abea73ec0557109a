# -*- coding: utf-8 -*-
"""
JSON → TOON 변환 결과 크기 비교

토크나이저 없이 문자 수 / 줄 수만으로 얼마나 줄었는지 측정합니다.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class SizeComparison:
    """JSON 원문과 TOON 결과의 크기 비교."""

    json_chars: int
    json_lines: int
    toon_chars: int
    toon_lines: int

    @property
    def chars_saved(self) -> int:
        return self.json_chars - self.toon_chars

    @property
    def reduction_percent(self) -> float:
        if self.json_chars == 0:
            return 0.0
        return round(self.chars_saved / self.json_chars * 100, 2)

    def __str__(self) -> str:
        return (
            f"JSON: {self.json_chars} chars, {self.json_lines} lines | "
            f"TOON: {self.toon_chars} chars, {self.toon_lines} lines | "
            f"reduction: {self.reduction_percent:.2f}%"
        )


def _line_count(text: str) -> int:
    return len(text.splitlines()) if text else 0


def compare_sizes(json_text: str, toon_text: str) -> SizeComparison:
    return SizeComparison(
        json_chars=len(json_text),
        json_lines=_line_count(json_text),
        toon_chars=len(toon_text),
        toon_lines=_line_count(toon_text),
    )
