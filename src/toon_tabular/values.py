# -*- coding: utf-8 -*-
"""Structured Value 분류와 스칼라 렌더링.

입력은 JSON 파싱 결과와 같은 Python 값(None/bool/int/float/str/dict/list)입니다.
`kind_of`가 유일한 타입 판별 지점이고, serializer는 그 결과로만 분기합니다.
"""
from __future__ import annotations

import math
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel

from .config import ToonEncodeError
from .quoting import quote


class ValueKind(Enum):
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    MAPPING = "mapping"
    SEQUENCE = "sequence"


SCALAR_KINDS = frozenset({ValueKind.NULL, ValueKind.BOOL, ValueKind.NUMBER, ValueKind.STRING})


def kind_of(value: Any) -> ValueKind:
    if value is None:
        return ValueKind.NULL
    # bool은 int의 하위 타입이므로 숫자보다 먼저 판별
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, (int, float, Decimal)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    raise ToonEncodeError(f"Object of type {type(value).__name__} is not TOON serializable")


def is_scalar(value: Any) -> bool:
    return kind_of(value) in SCALAR_KINDS


def normalize(value: Any) -> Any:
    """pydantic 모델을 JSON 호환 값으로 펼칩니다. 다른 값은 그대로 반환."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    return value


def format_number(n: Any) -> str:
    """왕복 가능한 최소 길이의 숫자 표기.

    - 정수는 그대로
    - 정수값 float는 `.0` 없이 (`1.0` → `1`), `-0.0` → `0`
    - 지수 표기는 소수점 표기로 풀어서 씀 (`1e-07` → `0.0000001`)
    - 단, 1e16 이상의 정수값 float는 지수 표기 유지 (`1e+300`)
    - NaN / inf 는 TOON에 표현이 없으므로 `null`
    """
    if isinstance(n, int):
        return str(n)
    if isinstance(n, float):
        if math.isnan(n) or math.isinf(n):
            return "null"
        if n == 0.0:
            return "0"
        if n.is_integer():
            if abs(n) < 1e16:
                return str(int(n))
            # 풀어 쓰면 정수로 읽히므로 지수 표기 유지
            return repr(n)
        text = repr(n)
    else:
        if not n.is_finite():
            return "null"
        text = str(n)
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


def render_primitive(value: Any) -> str:
    kind = kind_of(value)
    if kind is ValueKind.NULL:
        return "null"
    if kind is ValueKind.BOOL:
        return "true" if value else "false"
    if kind is ValueKind.NUMBER:
        return format_number(value)
    if kind is ValueKind.STRING:
        return quote(value)
    raise ToonEncodeError(f"Expected a scalar, got {kind.value}")
