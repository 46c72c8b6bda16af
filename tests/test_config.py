# =============================================================================
# Configuration Tests
# =============================================================================

import pytest

from maildir_engine.config import (
    AccountConfig,
    Config,
    ConfigError,
    StorageConfig,
    get_xdg_config_home,
    get_xdg_data_home,
)


def test_xdg_paths_respect_environment(isolated_xdg):
    assert get_xdg_config_home() == isolated_xdg / "config" / "maildir-engine"
    assert get_xdg_data_home() == isolated_xdg / "data" / "maildir-engine"
    assert Config.config_file_path() == isolated_xdg / "config" / "maildir-engine" / "config.toml"


def test_load_defaults_when_missing(isolated_xdg):
    config = Config.load()
    assert config.default_account == ""
    assert config.mail_root == isolated_xdg / "data" / "maildir-engine" / "mail"
    assert config.storage == StorageConfig()
    assert config.accounts == {}


def test_load_from_toml(isolated_xdg):
    path = isolated_xdg / "config.toml"
    path.write_text(
        """
[general]
default_account = "personal"
mail_root = "/srv/mail"

[storage]
hostname = "mailbox"
fsync = false
delivery_attempts = 4

[accounts.personal]
folders = { drafts = "Drafts", sent = "Sent Items" }

[accounts.work]
root = "/data/work-mail"
"""
    )

    config = Config.load(path)

    assert config.default_account == "personal"
    assert str(config.mail_root) == "/srv/mail"
    assert config.storage == StorageConfig(hostname="mailbox", fsync=False, delivery_attempts=4)
    assert config.accounts["personal"].folders == {"drafts": "Drafts", "sent": "Sent Items"}
    assert str(config.accounts["work"].root) == "/data/work-mail"


def test_maildir_path_resolution(temp_dir):
    config = Config(
        default_account="personal",
        mail_root=temp_dir,
        accounts={
            "personal": AccountConfig(name="personal", folders={"drafts": "Drafts"}),
            "work": AccountConfig(name="work", root=temp_dir / "elsewhere"),
        },
    )

    assert config.maildir_path("drafts") == temp_dir / "personal" / "Drafts"
    assert config.maildir_path("INBOX") == temp_dir / "personal" / "INBOX"
    assert config.maildir_path("drafts", account="work") == temp_dir / "elsewhere" / "drafts"
    assert config.maildir_path("INBOX", account="unknown") == temp_dir / "unknown" / "INBOX"


def test_maildir_path_needs_an_account(temp_dir):
    with pytest.raises(ConfigError):
        Config(mail_root=temp_dir).maildir_path("INBOX")


def test_env_overrides_mail_root(isolated_xdg, monkeypatch):
    monkeypatch.setenv("MAILDIR_ROOT", str(isolated_xdg / "override"))
    assert Config.load().mail_root == isolated_xdg / "override"


def test_invalid_toml_raises(isolated_xdg):
    path = isolated_xdg / "config.toml"
    path.write_text("[general\n")
    with pytest.raises(ConfigError):
        Config.load(path)


def test_invalid_delivery_attempts_raises(isolated_xdg):
    path = isolated_xdg / "config.toml"
    path.write_text("[storage]\ndelivery_attempts = 0\n")
    with pytest.raises(ConfigError):
        Config.load(path)


def test_save_and_reload(isolated_xdg):
    config = Config(
        default_account="personal",
        mail_root=isolated_xdg / "mail",
        storage=StorageConfig(hostname="h", fsync=False, delivery_attempts=2),
        accounts={
            "personal": AccountConfig(name="personal", folders={"drafts": "Drafts"}),
            "work": AccountConfig(name="work", root=isolated_xdg / "work"),
        },
    )

    config.save()
    loaded = Config.load()

    assert Config.config_file_path().exists()
    assert loaded == config
