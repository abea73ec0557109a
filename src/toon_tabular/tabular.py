# -*- coding: utf-8 -*-
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from .values import ValueKind, is_scalar, kind_of


@dataclass(frozen=True)
class TabularShape:
    """배열의 tabular 판정 결과.

    - fields: 모든 원소가 같은 키 집합을 가진 객체이면 정렬된 키 목록, 아니면 None
    - flat: fields의 값이 모두 스칼라인지 (compact row 렌더링 가능 여부)
    """
    fields: Optional[List[str]]
    flat: bool

    @property
    def is_tabular(self) -> bool:
        return self.fields is not None

    @property
    def renders_as_table(self) -> bool:
        return self.fields is not None and self.flat


def analyze_tabular(arr: Sequence[Any]) -> Tuple[bool, Optional[List[str]]]:
    """모든 원소가 같은 키 집합을 가진 객체인지 확인합니다.

    키는 정렬해서 반환하므로 입력의 키 순서와 무관하게 출력이 같습니다.
    """
    if len(arr) == 0:
        return False, None

    first_keys: Optional[List[str]] = None
    for item in arr:
        if kind_of(item) is not ValueKind.MAPPING:
            return False, None
        keys = sorted(item.keys())
        if first_keys is None:
            first_keys = keys
        elif keys != first_keys:
            return False, None

    # 빈 객체만 있는 배열은 필드 목록이 비므로 표로 쓰지 않음
    if not first_keys:
        return False, None
    return True, first_keys


def is_flat_tabular(arr: Sequence[Any], fields: Sequence[str]) -> bool:
    for item in arr:
        for field in fields:
            if not is_scalar(item[field]):
                return False
    return True


def tabular_shape(arr: Sequence[Any]) -> TabularShape:
    ok, fields = analyze_tabular(arr)
    if not ok or fields is None:
        return TabularShape(fields=None, flat=False)
    return TabularShape(fields=fields, flat=is_flat_tabular(arr, fields))
