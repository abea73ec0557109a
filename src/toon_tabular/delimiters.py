# -*- coding: utf-8 -*-
from __future__ import annotations

import re
from enum import Enum
from typing import Any, Iterable, Optional


class Delimiter(str, Enum):
    COMMA = ","
    PIPE = "|"
    TAB = "\t"


# `[3]`, `[3|]`, `[3<TAB>]` 길이 표기. 표기된 구분자가 본문 내용보다 우선한다
_LENGTH_ANNOTATION_RE = re.compile(r"\[(\d+)([|\t]?)\]")
_QUOTED_SPAN_RE = re.compile(r'"(?:[^"\\]|\\.)*"')


def choose_delimiter(values: Iterable[Any]) -> Delimiter:
    """문자열 값들을 훑어 충돌하지 않는 구분자를 고릅니다.

    comma → pipe → tab 순서. tab은 마지막 수단이라 검사하지 않습니다.
    """
    has_comma = False
    has_pipe = False
    for val in values:
        if isinstance(val, str):
            if "," in val:
                has_comma = True
            if "|" in val:
                has_pipe = True
    if not has_comma:
        return Delimiter.COMMA
    if not has_pipe:
        return Delimiter.PIPE
    return Delimiter.TAB


def delimiter_marker(delimiter: Delimiter) -> str:
    if delimiter is Delimiter.COMMA:
        return ""
    return delimiter.value


def row_separator(delimiter: Delimiter) -> str:
    """행/inline 배열 렌더링용 구분자 (comma, pipe 뒤에 공백 하나)."""
    if delimiter is Delimiter.TAB:
        return "\t"
    return delimiter.value + " "


def compact_separator(delimiter: Delimiter) -> str:
    return delimiter.value


def detect_delimiter(line: str) -> Delimiter:
    if "|" in line:
        return Delimiter.PIPE
    if "\t" in line:
        return Delimiter.TAB
    return Delimiter.COMMA


def marker_delimiter(line: str) -> Optional[Delimiter]:
    """헤더의 길이 표기에서 구분자를 읽습니다. 표기가 없으면 None.

    quote된 키 안의 `[1|]` 같은 텍스트는 표기로 보지 않습니다.
    """
    m = _LENGTH_ANNOTATION_RE.search(_QUOTED_SPAN_RE.sub('""', line))
    if not m:
        return None
    return Delimiter(m.group(2)) if m.group(2) else Delimiter.COMMA


def header_delimiter(header_line: str) -> Delimiter:
    declared = marker_delimiter(header_line)
    if declared is not None:
        return declared
    return detect_delimiter(header_line)
