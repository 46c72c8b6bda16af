# =============================================================================
# Pytest Configuration and Fixtures
# =============================================================================
# Shared fixtures for the maildir-engine test suite.
# =============================================================================

import pytest
import tempfile
from pathlib import Path

from maildir_engine.storage import Maildir, create_maildir


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def maildir_path(temp_dir):
    """A freshly created, empty Maildir."""
    path = temp_dir / "INBOX"
    assert create_maildir(path)
    return path


@pytest.fixture
def maildir(maildir_path):
    """Maildir facade over an empty Maildir with a fixed hostname."""
    return Maildir(maildir_path, hostname="testhost")


@pytest.fixture
def place_message(maildir_path):
    """
    Factory that drops a file straight into new/ or cur/ under a given
    name, bypassing the writer. For building listings from known names.
    """
    def _place(filename: str, subdir: str = "cur", content: str = "Subject: x\n\nbody\n") -> Path:
        path = maildir_path / subdir / filename
        path.write_text(content)
        return path

    return _place


@pytest.fixture
def sample_message():
    """A small RFC 5322 message with a folded header."""
    return (
        "From: Alice Example <alice@example.com>\n"
        "To: bob@example.com\n"
        "Subject: Quarterly report\n"
        "  and planning notes\n"
        "Date: Mon, 15 Jan 2024 10:30:00 +0000\n"
        "Message-ID: <report-1@example.com>\n"
        "\n"
        "Hi Bob,\n"
        "\n"
        "Header-looking: line in the body\n"
    )


@pytest.fixture
def isolated_xdg(temp_dir, monkeypatch):
    """Point XDG config/data homes into the temp dir and clear MAILDIR_ROOT."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(temp_dir / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(temp_dir / "data"))
    monkeypatch.delenv("MAILDIR_ROOT", raising=False)
    return temp_dir
