"""Tests for the local storage backend."""

from io import BytesIO

import pytest

from storage import LocalStorage, build_upload_filename


def test_upload_filename_is_timestamped_and_sanitized():
    name = build_upload_filename("../../etc/My Photo.PNG", now=1700000000.5)

    millis, tag, original = name.split("-", 2)
    assert millis == "1700000000500"
    assert len(tag) == 8
    assert original == "etc_My_Photo.PNG"


def test_upload_filenames_do_not_collide_within_the_same_millisecond():
    assert build_upload_filename("a.pdf", now=1.0) != build_upload_filename("a.pdf", now=1.0)


def test_save_and_delete(tmp_path):
    storage = LocalStorage(str(tmp_path / "uploads"))

    stored = storage.save(BytesIO(b"content"), "doc.pdf")

    assert (tmp_path / "uploads" / stored).read_bytes() == b"content"
    storage.delete(stored)
    assert not (tmp_path / "uploads" / stored).exists()
    storage.delete(stored)


def test_save_rejects_empty_filename(tmp_path):
    storage = LocalStorage(str(tmp_path))

    with pytest.raises(ValueError):
        storage.save(BytesIO(b"x"), "../")
