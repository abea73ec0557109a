from __future__ import annotations

import pytest
from toon_tabular import ToonDecodeError, UnsupportedSourceError, align_file, convert_file
from toon_tabular.cli import main

USERS_JSON = '{"users": [{"id": 1, "name": "Alice"}, {"id": 2, "name": "Bob"}]}'
USERS_TOON = "users[2]{id,name}:\n  1, Alice\n  2, Bob"


def test_convert_file_returns_toon_and_stats(tmp_path):
    src = tmp_path / "users.json"
    src.write_text(USERS_JSON, encoding="utf-8")
    result = convert_file(src)
    assert result.toon_text == USERS_TOON
    assert result.output is None
    assert result.comparison.toon_chars < result.comparison.json_chars
    assert not (tmp_path / "users.toon").exists()


def test_convert_file_save_writes_sibling(tmp_path):
    src = tmp_path / "users.json"
    src.write_text(USERS_JSON, encoding="utf-8")
    result = convert_file(src, save=True)
    assert result.output == tmp_path / "users.toon"
    assert result.output.read_text(encoding="utf-8") == USERS_TOON + "\n"


def test_convert_rejects_non_json_before_reading(tmp_path):
    src = tmp_path / "users.txt"
    with pytest.raises(UnsupportedSourceError):
        convert_file(src, save=True)
    assert not (tmp_path / "users.toon").exists()


def test_convert_surfaces_decode_error(tmp_path):
    src = tmp_path / "broken.json"
    src.write_text("{nope", encoding="utf-8")
    with pytest.raises(ToonDecodeError):
        convert_file(src, save=True)
    assert not (tmp_path / "broken.toon").exists()


def test_align_file_rewrites_in_place(tmp_path):
    target = tmp_path / "data.toon"
    target.write_text("t[2]{a,b}:\n  1,x\n  22,y\n", encoding="utf-8")
    result = align_file(target)
    assert result.changed
    assert (result.report.rows, result.report.regions) == (2, 1)
    assert target.read_text(encoding="utf-8") == "t[2]{a,b}:\n  1 , x\n  22, y\n"


def test_align_file_rejects_other_kinds(tmp_path):
    with pytest.raises(UnsupportedSourceError):
        align_file(tmp_path / "data.json")


def test_cli_json2toon_stdout(tmp_path, capsys):
    src = tmp_path / "users.json"
    src.write_text(USERS_JSON, encoding="utf-8")
    assert main(["json2toon", str(src), "--stats"]) == 0
    captured = capsys.readouterr()
    assert captured.out == USERS_TOON + "\n"
    assert "reduction" in captured.err


def test_cli_json2toon_output_file(tmp_path):
    src = tmp_path / "users.json"
    src.write_text(USERS_JSON, encoding="utf-8")
    out = tmp_path / "out.toon"
    assert main(["json2toon", str(src), "-o", str(out)]) == 0
    assert out.read_text(encoding="utf-8") == USERS_TOON + "\n"


def test_cli_reports_errors(tmp_path, capsys):
    src = tmp_path / "broken.json"
    src.write_text("[1,", encoding="utf-8")
    assert main(["json2toon", str(src)]) == 1
    assert "Failed to parse JSON" in capsys.readouterr().err

    assert main(["align", str(src)]) == 1
    assert "not a TOON file" in capsys.readouterr().err


def test_cli_align_check_and_write(tmp_path, capsys):
    target = tmp_path / "data.toon"
    original = "t[2]{a,b}:\n  1,x\n  22,y"
    target.write_text(original, encoding="utf-8")

    assert main(["align", str(target), "--check"]) == 1
    assert target.read_text(encoding="utf-8") == original

    assert main(["align", str(target)]) == 0
    assert "Aligned 2 rows in 1 tables" in capsys.readouterr().err
    assert main(["align", str(target), "--check"]) == 0

    assert main(["shrink", str(target)]) == 0
    assert target.read_text(encoding="utf-8") == original
