"""Tests for ImageStorage."""

import shutil
from pathlib import Path

from contactbook.infrastructure import ImageStorage


async def test_copy_into_storage_returns_owned_path(tmp_path) -> None:
    source = tmp_path / "picked.png"
    source.write_bytes(b"\x89PNG fake")
    storage = ImageStorage(tmp_path / "images")

    path = await storage.copy_into_storage(str(source), "Ann.jpg")

    assert path is not None
    assert Path(path) == (tmp_path / "images" / "Ann.jpg").resolve()
    assert Path(path).read_bytes() == b"\x89PNG fake"


async def test_copy_accepts_file_uri(tmp_path) -> None:
    source = tmp_path / "my pic.png"
    source.write_bytes(b"data")
    storage = ImageStorage(tmp_path / "images")

    path = await storage.copy_into_storage(source.as_uri(), "Ann.jpg")

    assert path is not None
    assert Path(path).read_bytes() == b"data"


async def test_unreadable_source_returns_none(tmp_path) -> None:
    storage = ImageStorage(tmp_path / "images")

    assert await storage.copy_into_storage(str(tmp_path / "missing.png"), "Ann.jpg") is None
    assert await storage.copy_into_storage(str(tmp_path), "Ann.jpg") is None
    assert not (tmp_path / "images" / "Ann.jpg").exists()


async def test_file_name_cannot_escape_storage(tmp_path) -> None:
    source = tmp_path / "picked.png"
    source.write_bytes(b"x")
    storage = ImageStorage(tmp_path / "images")

    path = await storage.copy_into_storage(str(source), "../escape.jpg")

    assert Path(path).parent == (tmp_path / "images").resolve()


async def test_copy_onto_itself_keeps_the_stored_bytes(tmp_path) -> None:
    source = tmp_path / "picked.png"
    source.write_bytes(b"IMAGEDATA")
    storage = ImageStorage(tmp_path / "images")
    stored = await storage.copy_into_storage(str(source), "Ann.jpg")

    path = await storage.copy_into_storage(stored, "Ann.jpg")

    assert path == stored
    assert Path(path).read_bytes() == b"IMAGEDATA"


async def test_failed_copy_keeps_previous_file_and_leaves_no_partial(tmp_path, monkeypatch) -> None:
    source = tmp_path / "picked.png"
    source.write_bytes(b"NEW")
    storage = ImageStorage(tmp_path / "images")
    (tmp_path / "images").mkdir()
    (tmp_path / "images" / "Ann.jpg").write_bytes(b"OLD")

    def broken_copy(reader, writer):
        writer.write(b"N")
        raise OSError("device full")

    monkeypatch.setattr(shutil, "copyfileobj", broken_copy)

    assert await storage.copy_into_storage(str(source), "Ann.jpg") is None
    assert [p.name for p in (tmp_path / "images").iterdir()] == ["Ann.jpg"]
    assert (tmp_path / "images" / "Ann.jpg").read_bytes() == b"OLD"
