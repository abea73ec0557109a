# -*- coding: utf-8 -*-
"""TOON 문자열 quoting / escaping 규칙."""
from __future__ import annotations

import re

_NUMERIC_START_RE = re.compile(r"^-?\d")
_SPECIAL_CHARS_RE = re.compile(r'[,|\[\]{}:"\\\n\r\t]')
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_RESERVED_WORDS = frozenset({"true", "false", "null"})

# 순서 중요: backslash를 먼저 치환해야 이중 escape가 생기지 않음
_ESCAPES = (
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\t", "\\t"),
)
_UNESCAPES = {
    "\\": "\\",
    '"': '"',
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


def needs_quoting(s: str) -> bool:
    if s == "":
        return True
    if s in _RESERVED_WORDS:
        return True
    if _NUMERIC_START_RE.match(s):
        return True
    if _SPECIAL_CHARS_RE.search(s):
        return True
    if s[0].isspace() or s[-1].isspace():
        return True
    return False


def escape(s: str) -> str:
    for raw, escaped in _ESCAPES:
        s = s.replace(raw, escaped)
    return s


def unescape(s: str) -> str:
    """`escape`의 역변환. 알 수 없는 escape(`\\x` 등)는 그대로 둡니다."""
    if "\\" not in s:
        return s
    out = []
    i = 0
    while i < len(s):
        ch = s[i]
        if ch == "\\" and i + 1 < len(s) and s[i + 1] in _UNESCAPES:
            out.append(_UNESCAPES[s[i + 1]])
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def quote(s: str) -> str:
    if not needs_quoting(s):
        return s
    return '"' + escape(s) + '"'


def is_quoted(token: str) -> bool:
    return len(token) >= 2 and token[0] == '"' and token[-1] == '"'


def unquote(token: str) -> str:
    if is_quoted(token):
        return unescape(token[1:-1])
    return token


def is_identifier(key: str) -> bool:
    return _IDENTIFIER_RE.match(key) is not None


def format_key(key: str) -> str:
    if is_identifier(key):
        return key
    return '"' + escape(key) + '"'
