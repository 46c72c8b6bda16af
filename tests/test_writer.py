# =============================================================================
# Atomic Writer Tests
# =============================================================================

import errno
import os

from maildir_engine.storage import atomic_rename, atomic_write, staging_filename
from maildir_engine.storage import writer


def test_write_lands_complete_file(maildir_path):
    target = maildir_path / "new" / "1700000000.1_2.host,S=0:2,"
    result = atomic_write(maildir_path / "tmp", target, "Subject: hi\n\nbody\n")

    assert result
    assert result.path == target
    assert result.error is None
    assert target.read_text() == "Subject: hi\n\nbody\n"
    assert list((maildir_path / "tmp").iterdir()) == []


def test_write_bytes(maildir_path):
    target = maildir_path / "cur" / "msg"
    data = b"\x00\x01binary\xff"
    assert atomic_write(maildir_path / "tmp", target, data, fsync=False)
    assert target.read_bytes() == data


def test_failure_mid_content_leaves_no_trace(maildir_path, monkeypatch):
    target = maildir_path / "new" / "1700000000.1_2.host,S=0:2,"

    def failing_write(f, data):
        f.write(data[: len(data) // 2])
        raise OSError(errno.ENOSPC, "No space left on device")

    monkeypatch.setattr(writer, "_write_fully", failing_write)

    result = atomic_write(maildir_path / "tmp", target, "x" * 4096)

    assert not result
    assert "No space left" in result.error
    assert result.path == target
    assert not target.exists()
    assert list((maildir_path / "tmp").iterdir()) == []


def test_fsync_failure_cleans_up(maildir_path, monkeypatch):
    target = maildir_path / "new" / "msg"

    def failing_fsync(fd):
        raise OSError(errno.EIO, "I/O error")

    monkeypatch.setattr(writer.os, "fsync", failing_fsync)

    assert not atomic_write(maildir_path / "tmp", target, "content")
    assert not target.exists()
    assert list((maildir_path / "tmp").iterdir()) == []


def test_missing_staging_dir_reports_failure(temp_dir):
    target = temp_dir / "target"
    result = atomic_write(temp_dir / "no-such-tmp", target, "content")
    assert not result
    assert "temporary file" in result.error
    assert not target.exists()


def test_rename_failure_reports_target_and_cleans_up(maildir_path):
    target = maildir_path / "missing-subdir" / "msg"
    result = atomic_write(maildir_path / "tmp", target, "content")

    assert not result
    assert str(target) in result.error
    assert list((maildir_path / "tmp").iterdir()) == []


def test_default_replaces_existing_target(maildir_path):
    target = maildir_path / "cur" / "msg"
    target.write_text("old")
    assert atomic_write(maildir_path / "tmp", target, "new")
    assert target.read_text() == "new"


def test_no_clobber_reports_collision(maildir_path):
    target = maildir_path / "cur" / "msg"
    target.write_text("old")

    result = atomic_write(maildir_path / "tmp", target, "new", no_clobber=True)

    assert not result
    assert result.collision
    assert target.read_text() == "old"
    assert list((maildir_path / "tmp").iterdir()) == []


def test_no_clobber_without_hard_links(maildir_path, monkeypatch):
    def no_link(src, dst):
        raise OSError(errno.EPERM, "Operation not permitted")

    monkeypatch.setattr(writer.os, "link", no_link)
    target = maildir_path / "cur" / "msg"

    assert atomic_write(maildir_path / "tmp", target, "first", no_clobber=True)
    result = atomic_write(maildir_path / "tmp", target, "second", no_clobber=True)

    assert result.collision
    assert target.read_text() == "first"


def test_atomic_rename_moves_file(temp_dir):
    src = temp_dir / "a"
    src.write_text("data")
    result = atomic_rename(src, temp_dir / "b", no_clobber=True)

    assert result
    assert not src.exists()
    assert (temp_dir / "b").read_text() == "data"


def test_atomic_rename_missing_source(temp_dir):
    result = atomic_rename(temp_dir / "a", temp_dir / "b")
    assert not result
    assert result.error


def test_staging_filenames_are_distinct():
    names = {staging_filename() for _ in range(100)}
    assert len(names) == 100
    assert all(f".P{os.getpid()}Q" in name for name in names)


def test_staging_file_removed_when_unlink_after_link_fails(maildir_path, monkeypatch):
    real_unlink = os.unlink
    failures = []

    def unlink_fails_once(path, *args, **kwargs):
        if not failures:
            failures.append(path)
            raise OSError(errno.EBUSY, "Device or resource busy")
        return real_unlink(path, *args, **kwargs)

    monkeypatch.setattr(writer.os, "unlink", unlink_fails_once)
    target = maildir_path / "cur" / "msg"

    result = atomic_write(maildir_path / "tmp", target, "content", no_clobber=True)

    assert result
    assert failures
    assert target.read_text() == "content"
    assert list((maildir_path / "tmp").iterdir()) == []
