# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from pydantic import JsonValue, TypeAdapter, ValidationError

from .config import DEFAULT_CONFIG, ToonConfig, ToonDecodeError, ToonEncodeError
from .delimiters import (
    Delimiter,
    choose_delimiter,
    compact_separator,
    delimiter_marker,
    row_separator,
)
from .quoting import format_key
from .tabular import tabular_shape
from .values import ValueKind, is_scalar, kind_of, normalize, render_primitive

logger = logging.getLogger(__name__)

_JSON_ADAPTER: TypeAdapter[Any] = TypeAdapter(JsonValue)


class ToonSerializer:
    """Structured Value → TOON 텍스트.

    배열마다 다음 순서로 인코딩을 고릅니다.
      1. 빈 배열: `key[0]:`
      2. tabular: 모든 원소가 같은 키를 가진 객체이고 값이 전부 스칼라
      3. inline: 스칼라만 있고 `inline_array_limit` 이하
      4. dash 리스트 (fallback)
    """

    def __init__(self, cfg: Optional[ToonConfig] = None):
        self.cfg = cfg or DEFAULT_CONFIG

    # ---------------- Public ----------------
    def serialize(self, value: Any) -> str:
        return "\n".join(self.to_lines(value))

    def to_lines(self, value: Any) -> List[str]:
        value = _prepare(value)
        kind = kind_of(value)
        if kind is ValueKind.MAPPING:
            return self._object_lines(value, 0)
        if kind is ValueKind.SEQUENCE:
            return self._array_lines(None, value, 0)
        return [render_primitive(value)]

    # ---------------- Helpers ----------------
    def _pad(self, indent: int) -> str:
        return self.cfg.indent_unit * indent

    def _object_lines(self, obj: Dict[str, Any], indent: int) -> List[str]:
        prefix = self._pad(indent)
        lines: List[str] = []
        for key in sorted(obj):
            val = obj[key]
            kind = kind_of(val)
            if kind is ValueKind.SEQUENCE:
                lines.extend(self._array_lines(key, val, indent))
            elif kind is ValueKind.MAPPING:
                lines.append(f"{prefix}{format_key(key)}:")
                lines.extend(self._object_lines(val, indent + 1))
            else:
                lines.append(f"{prefix}{format_key(key)}: {render_primitive(val)}")
        return lines

    def _array_lines(self, key: Optional[str], arr: List[Any], indent: int) -> List[str]:
        prefix = self._pad(indent)
        head = prefix + (format_key(key) if key is not None else "")

        if len(arr) == 0:
            return [f"{head}[0]:"]

        shape = tabular_shape(arr)
        if shape.renders_as_table:
            return self._tabular_lines(head, arr, shape.fields or [], indent)

        if len(arr) <= self.cfg.inline_array_limit and all(is_scalar(item) for item in arr):
            delimiter = choose_delimiter(arr)
            body = row_separator(delimiter).join(render_primitive(item) for item in arr)
            return [f"{head}[{len(arr)}{delimiter_marker(delimiter)}]: {body}"]

        return self._list_lines(head, arr, indent)

    def _tabular_lines(self, head: str, arr: List[Dict[str, Any]], fields: List[str], indent: int) -> List[str]:
        delimiter = choose_delimiter(item[field] for item in arr for field in fields)
        field_list = compact_separator(delimiter).join(format_key(f) for f in fields)
        lines = [f"{head}[{len(arr)}{delimiter_marker(delimiter)}]{{{field_list}}}:"]

        row_prefix = self._pad(indent + 1)
        sep = row_separator(delimiter)
        for item in arr:
            lines.append(row_prefix + sep.join(render_primitive(item[field]) for field in fields))
        if delimiter is not Delimiter.COMMA:
            logger.debug("tabular array uses %r delimiter (%d rows)", delimiter.value, len(arr))
        return lines

    def _list_lines(self, head: str, arr: List[Any], indent: int) -> List[str]:
        lines = [f"{head}[{len(arr)}]:"]
        item_prefix = self._pad(indent + 1)
        for item in arr:
            kind = kind_of(item)
            if kind is ValueKind.MAPPING:
                obj_lines = self._object_lines(item, indent + 2)
                if obj_lines:
                    # 첫 필드는 dash 줄에 붙이고 나머지는 객체 자신의 들여쓰기 유지
                    lines.append(f"{item_prefix}- {obj_lines[0].lstrip(' ')}")
                    lines.extend(obj_lines[1:])
                else:
                    lines.append(f"{item_prefix}-")
            elif kind is ValueKind.SEQUENCE:
                lines.append(f"{item_prefix}-")
                lines.extend(self._array_lines(None, item, indent + 2))
            else:
                lines.append(f"{item_prefix}- {render_primitive(item)}")
        return lines


def _prepare(value: Any) -> Any:
    """입력을 복사하면서 pydantic 모델을 펼치고 키 타입을 검사합니다.

    원본 값은 변경하지 않습니다.
    """
    value = normalize(value)
    kind = kind_of(value)
    if kind is ValueKind.MAPPING:
        out: Dict[str, Any] = {}
        for k, v in value.items():
            if not isinstance(k, str):
                raise ToonEncodeError(f"Mapping keys must be strings, got {type(k).__name__}: {k!r}")
            out[k] = _prepare(v)
        return out
    if kind is ValueKind.SEQUENCE:
        return [_prepare(v) for v in value]
    return value


# ============================================================
# Module-level API
# ============================================================
def serialize(value: Any, cfg: Optional[ToonConfig] = None) -> str:
    return ToonSerializer(cfg).serialize(value)


def decode_json(text: str) -> Any:
    """JSON 텍스트를 Structured Value로 디코딩합니다.

    Raises:
        ToonDecodeError: JSON 문법 오류 (메시지는 pydantic 오류를 그대로 포함)
    """
    try:
        return _JSON_ADAPTER.validate_json(text)
    except ValidationError as e:
        raise ToonDecodeError(f"Failed to parse JSON: {e}") from e


def json_to_toon(text: str, cfg: Optional[ToonConfig] = None) -> str:
    data = decode_json(text)
    return serialize(data, cfg)
