# -*- coding: utf-8 -*-
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List

from .config import ToonDecodeError
from .delimiters import Delimiter, header_delimiter
from .quoting import is_quoted, unquote

Scalar = Any

_TABULAR_HEADER_RE = re.compile(
    r'^(?:(?P<name>[A-Za-z_][A-Za-z0-9_]*|"(?:[^"\\]|\\.)*"))?'
    r"\[(?P<n>\d+)(?P<marker>[|\t]?)\]\{(?P<cols>.*)\}:\s*$"
)
_INT_RE = re.compile(r"-?\d+")
_FLOAT_RE = re.compile(r"-?\d+(?:\.\d+)?(?:[eE][-+]?\d+)?")


@dataclass(frozen=True)
class FieldToken:
    text: str
    start: int
    end: int


def tokenize_row(line: str, delimiter: Delimiter | str) -> List[FieldToken]:
    """quote를 인식하며 한 행을 필드 토큰으로 나눕니다.

    - `"`는 quote 상태를 토글하고 토큰 텍스트에 그대로 남김 (unescape는 나중에)
    - quote 안의 backslash는 다음 문자와 함께 그대로 보존
    - 구분자는 quote 밖에서만 필드를 끝냄
    - 마지막 토큰은 비어 있어도 항상 포함
    - 닫히지 않은 quote는 남은 텍스트를 하나의 토큰으로 취급 (예외 없음)
    """
    sep = delimiter.value if isinstance(delimiter, Delimiter) else delimiter
    tokens: List[FieldToken] = []
    current: List[str] = []
    start = 0
    in_quotes = False
    i = 0
    n = len(line)
    while i < n:
        ch = line[i]
        if ch == '"':
            in_quotes = not in_quotes
            current.append(ch)
        elif ch == "\\" and in_quotes and i + 1 < n:
            current.append(ch)
            current.append(line[i + 1])
            i += 1
        elif ch == sep and not in_quotes:
            tokens.append(FieldToken("".join(current), start, i))
            current = []
            start = i + 1
        else:
            current.append(ch)
        i += 1
    tokens.append(FieldToken("".join(current), start, n))
    return tokens


def split_row(line: str, delimiter: Delimiter | str) -> List[str]:
    return [tok.text for tok in tokenize_row(line, delimiter)]


def parse_scalar(raw: str) -> Scalar:
    """행 필드 하나를 값으로 되돌립니다 (`render_primitive`의 역)."""
    s = raw.strip()
    if is_quoted(s):
        return unquote(s)
    if s == "null":
        return None
    if s in ("true", "false"):
        return s == "true"
    if _INT_RE.fullmatch(s):
        return int(s)
    if _FLOAT_RE.fullmatch(s):
        return float(s)
    return s


def parse_tabular_header(header: str) -> Dict[str, Any]:
    m = _TABULAR_HEADER_RE.match(header.strip())
    if not m:
        raise ToonDecodeError(f"Invalid tabular header: {header.strip()!r}")
    delimiter = header_delimiter(header)
    cols = [unquote(c.strip()) for c in split_row(m.group("cols"), delimiter)]
    name = m.group("name")
    return {
        "name": unquote(name) if name else None,
        "count": int(m.group("n")),
        "delimiter": delimiter,
        "fields": cols,
    }


def decode_tabular(text: str) -> List[Dict[str, Any]]:
    """tabular 블록 하나(헤더 + 행들)를 객체 리스트로 디코딩합니다.

    전체 TOON 문법 파서가 아니라 serializer 출력의 tabular 블록만 대상으로 합니다.
    """
    lines = [ln for ln in text.splitlines() if ln.strip()]
    if not lines:
        raise ToonDecodeError("Empty input. No tabular block found.")
    header = parse_tabular_header(lines[0])
    fields = header["fields"]
    delimiter = header["delimiter"]

    rows: List[Dict[str, Any]] = []
    for ln in lines[1:]:
        values = split_row(ln.lstrip(" "), delimiter)
        if len(values) != len(fields):
            raise ToonDecodeError(
                f"Row has {len(values)} values, header declares {len(fields)} fields: {ln.strip()!r}"
            )
        rows.append({field: parse_scalar(v) for field, v in zip(fields, values)})

    if len(rows) != header["count"]:
        raise ToonDecodeError(f"Header declares {header['count']} rows, found {len(rows)}")
    return rows
