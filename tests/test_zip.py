from __future__ import annotations

import io
import zipfile
from pathlib import Path

import pytest

from heyvr.libs.streams import LogStream
from heyvr.libs.zip import ArchiveError, zip_directory


def test_directory_contents_become_archive_root(tmp_path: Path) -> None:
    game = tmp_path / "public"
    (game / "js").mkdir(parents=True)
    (game / "index.html").write_text("<html></html>", encoding="utf-8")
    (game / "js" / "game.js").write_text("console.log('hi');", encoding="utf-8")

    data = zip_directory(str(game), LogStream())

    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        assert zf.namelist() == ["index.html", "js/game.js"]
        assert zf.read("js/game.js") == b"console.log('hi');"
        assert all(info.compress_type == zipfile.ZIP_DEFLATED for info in zf.infolist())


def test_progress_logged(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "index.html").write_text("<html></html>", encoding="utf-8")
    zip_directory(str(tmp_path), LogStream())
    assert "Compressed 1 files" in capsys.readouterr().out


def test_missing_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(ArchiveError):
        zip_directory(str(tmp_path / "missing"), LogStream())
