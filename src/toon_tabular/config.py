# -*- coding: utf-8 -*-
from __future__ import annotations

import os
from dataclasses import dataclass


# ============================================================
# Errors
# ============================================================
class ToonError(ValueError):
    pass


class ToonDecodeError(ToonError):
    """외부 입력(JSON 등)을 Structured Value로 해석하지 못했을 때."""
    pass


class ToonEncodeError(ToonError):
    """TOON으로 표현할 수 없는 Python 값이 들어왔을 때."""
    pass


class UnsupportedSourceError(ToonError):
    """작업 대상 파일 종류가 맞지 않을 때 (변환 시작 전에 거부)."""
    pass


class ToonConfigError(ToonError):
    pass


# ============================================================
# Config
# ============================================================
DEFAULT_INDENT_STEP = 2
DEFAULT_INLINE_ARRAY_LIMIT = 5


@dataclass(frozen=True)
class ToonConfig:
    indent_step: int = DEFAULT_INDENT_STEP
    # 스칼라 배열을 한 줄(inline)로 쓰는 최대 원소 수. 초과하면 dash 리스트로 전개
    inline_array_limit: int = DEFAULT_INLINE_ARRAY_LIMIT
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.indent_step < 1:
            raise ToonConfigError(f"indent_step must be >= 1, got {self.indent_step}")
        if self.inline_array_limit < 0:
            raise ToonConfigError(f"inline_array_limit must be >= 0, got {self.inline_array_limit}")

    @property
    def indent_unit(self) -> str:
        return " " * self.indent_step

    @staticmethod
    def from_env() -> "ToonConfig":
        """환경 변수에서 설정을 읽습니다.

        - TOON_INDENT_STEP: 들여쓰기 폭 (기본 2)
        - TOON_INLINE_ARRAY_LIMIT: inline 배열 최대 길이 (기본 5)
        - TOON_LOG_LEVEL: 로그 레벨 (기본 WARNING)

        정수가 아닌 값은 기본값으로 되돌리고, 범위를 벗어난 값은 잘라냅니다.
        """
        indent_step = _env_int("TOON_INDENT_STEP", DEFAULT_INDENT_STEP)
        inline_limit = _env_int("TOON_INLINE_ARRAY_LIMIT", DEFAULT_INLINE_ARRAY_LIMIT)
        log_level = os.getenv("TOON_LOG_LEVEL", "WARNING").strip().upper() or "WARNING"
        return ToonConfig(
            indent_step=max(1, indent_step),
            inline_array_limit=max(0, inline_limit),
            log_level=log_level,
        )


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


DEFAULT_CONFIG = ToonConfig()
