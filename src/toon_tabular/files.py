# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .align import AlignmentReport, ToonDocument, align_buffer, shrink_buffer
from .config import ToonConfig, UnsupportedSourceError
from .serializer import json_to_toon
from .stats import SizeComparison, compare_sizes

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass
class ConversionResult:
    source: Path
    toon_text: str
    comparison: SizeComparison
    output: Optional[Path] = None


@dataclass
class FileAlignment:
    path: Path
    report: AlignmentReport
    text: str
    changed: bool


def _require_suffix(path: Path, suffix: str) -> None:
    if path.suffix.lower() != suffix:
        raise UnsupportedSourceError(f"{path.name} is not a {suffix[1:].upper()} file")


def toon_path_for(path: PathLike) -> Path:
    return Path(path).with_suffix(".toon")


def convert_file(path: PathLike, save: bool = False, cfg: Optional[ToonConfig] = None) -> ConversionResult:
    """`.json` 파일을 TOON으로 변환합니다.

    Args:
        path: 원본 JSON 파일
        save: True면 같은 위치에 `.toon` 확장자로 저장
        cfg: serializer 설정

    Raises:
        UnsupportedSourceError: `.json` 파일이 아닌 경우 (아무 작업도 하지 않음)
        ToonDecodeError: JSON 파싱 실패
    """
    source = Path(path)
    _require_suffix(source, ".json")

    json_text = source.read_text(encoding="utf-8")
    toon_text = json_to_toon(json_text, cfg)
    result = ConversionResult(source=source, toon_text=toon_text, comparison=compare_sizes(json_text, toon_text))

    if save:
        result.output = toon_path_for(source)
        result.output.write_text(toon_text + "\n", encoding="utf-8")
        logger.info("Saved to %s", result.output)
    return result


def align_file(path: PathLike, shrink: bool = False, write: bool = True) -> FileAlignment:
    """`.toon` 파일의 tabular 배열을 정렬(또는 축소)합니다.

    write=False 이면 파일은 그대로 두고 결과만 돌려줍니다.
    """
    target = Path(path)
    _require_suffix(target, ".toon")

    original = target.read_text(encoding="utf-8")
    doc = ToonDocument.from_text(original)
    report = shrink_buffer(doc) if shrink else align_buffer(doc)

    result = FileAlignment(path=target, report=report, text=doc.text, changed=doc.text != original)
    if write and result.changed:
        target.write_text(result.text, encoding="utf-8")
    return result
