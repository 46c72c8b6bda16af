# =============================================================================
# Configuration Management
# =============================================================================
# Handles loading, saving, and validating maildir-engine configuration, and
# resolving account/folder names to Maildir directories.
#
# XDG Base Directory Compliance (https://specifications.freedesktop.org/basedir-spec/):
#   - Config:  $XDG_CONFIG_HOME/maildir-engine/  (default: ~/.config/maildir-engine/)
#   - Data:    $XDG_DATA_HOME/maildir-engine/    (default: ~/.local/share/maildir-engine/)
#
# Files:
#   - config.toml: mail root, storage options, accounts and their folders
#
# Environment:
#   - MAILDIR_ROOT: overrides the configured mail root
#
# Example config.toml:
#
#   [general]
#   default_account = "personal"
#   mail_root = "~/Mail"
#
#   [storage]
#   hostname = ""              # empty = use the system hostname
#   fsync = true
#   delivery_attempts = 3
#
#   [accounts.personal]
#   root = "~/Mail/personal"   # optional, defaults to <mail_root>/<name>
#   folders = { drafts = "Drafts", inbox = "INBOX" }
# =============================================================================

import os
import tomllib  # Built into Python 3.11+
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w  # For writing TOML (tomllib is read-only)


# =============================================================================
# XDG Directory Management
# =============================================================================

# Application identifier used in all XDG paths
APP_NAME = "maildir-engine"

# Environment variable that overrides the mail root
MAIL_ROOT_ENV = "MAILDIR_ROOT"


def get_xdg_config_home() -> Path:
    """
    Returns the XDG config directory for maildir-engine.

    Respects $XDG_CONFIG_HOME if set, otherwise uses ~/.config/maildir-engine/
    """
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        base = Path(xdg_config)
    else:
        base = Path.home() / ".config"
    return base / APP_NAME


def get_xdg_data_home() -> Path:
    """
    Returns the XDG data directory for maildir-engine.

    Respects $XDG_DATA_HOME if set, otherwise uses ~/.local/share/maildir-engine/
    The default mail root lives under here.
    """
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        base = Path(xdg_data)
    else:
        base = Path.home() / ".local" / "share"
    return base / APP_NAME


# =============================================================================
# Configuration Data Structures
# =============================================================================

@dataclass
class StorageConfig:
    """
    Options for the Maildir storage engine.

    Attributes:
        hostname: Host segment for generated filenames. Empty means use the
                  system hostname (or "localhost" if unavailable).
        fsync: Flush staging files to disk before renaming them into place.
               Turning this off trades crash safety for speed.
        delivery_attempts: How many fresh filenames to try when a delivery
                           collides with an existing message.
    """
    hostname: str = ""
    fsync: bool = True
    delivery_attempts: int = 3


@dataclass
class AccountConfig:
    """
    Where one account's Maildirs live.

    Attributes:
        name: Account name (the key under [accounts]).
        root: Directory holding this account's Maildirs. None means
              <mail_root>/<name>.
        folders: Logical folder name -> directory relative to root,
                 e.g. {"drafts": "Drafts"}. Unlisted folders resolve to a
                 directory of the same name.
    """
    name: str
    root: Path | None = None
    folders: dict[str, str] = field(default_factory=dict)


@dataclass
class Config:
    """
    Main configuration container for maildir-engine.

    Attributes:
        default_account: Account used when none is given.
        mail_root: Parent directory of all account directories.
        storage: Storage engine options.
        accounts: Account configurations, keyed by name.

    Usage:
        >>> config = Config.load()
        >>> config.maildir_path("drafts", account="personal")
        PosixPath('/home/user/Mail/personal/Drafts')
    """
    default_account: str = ""
    mail_root: Path = field(default_factory=lambda: get_xdg_data_home() / "mail")
    storage: StorageConfig = field(default_factory=StorageConfig)
    accounts: dict[str, AccountConfig] = field(default_factory=dict)

    # -------------------------------------------------------------------------
    # File Paths
    # -------------------------------------------------------------------------

    @staticmethod
    def config_file_path() -> Path:
        """Returns the path to the main config file."""
        return get_xdg_config_home() / "config.toml"

    # -------------------------------------------------------------------------
    # Path Resolution
    # -------------------------------------------------------------------------

    def account_root(self, account: str | None = None) -> Path:
        """
        Returns the directory holding an account's Maildirs.

        Raises:
            ConfigError: If no account is given and there's no default.
        """
        name = account or self.default_account
        if not name:
            raise ConfigError("No account given and no default_account configured")

        acct = self.accounts.get(name)
        if acct is not None and acct.root is not None:
            return acct.root
        return self.mail_root / name

    def maildir_path(self, folder: str, account: str | None = None) -> Path:
        """
        Resolve a logical folder name to a Maildir directory.

        Args:
            folder: Logical folder name (e.g. "drafts", "INBOX").
            account: Account name. Defaults to default_account.

        Returns:
            The Maildir directory. It is not created or validated here.
        """
        name = account or self.default_account
        acct = self.accounts.get(name)
        relative = acct.folders.get(folder, folder) if acct else folder
        return self.account_root(name) / relative

    # -------------------------------------------------------------------------
    # Loading and Saving
    # -------------------------------------------------------------------------

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """
        Load configuration from the config file.

        If the config file doesn't exist, returns default configuration.
        $MAILDIR_ROOT, when set, overrides the mail root either way.

        Args:
            path: Config file to read. Defaults to the XDG location.

        Returns:
            Loaded Config object.

        Raises:
            ConfigError: If the config file exists but is invalid.
        """
        config_path = path or cls.config_file_path()

        if not config_path.exists():
            config = cls()
        else:
            try:
                with open(config_path, "rb") as f:
                    data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ConfigError(f"Invalid config file: {e}") from e
            config = cls._from_dict(data)

        env_root = os.environ.get(MAIL_ROOT_ENV)
        if env_root:
            config.mail_root = Path(env_root).expanduser()

        return config

    def save(self, path: Path | None = None) -> None:
        """
        Save configuration to the config file.

        Creates the config directory if it doesn't exist.
        """
        config_path = path or self.config_file_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "wb") as f:
            tomli_w.dump(self._to_dict(), f)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "Config":
        """
        Create a Config object from a dictionary (parsed TOML).

        Raises:
            ConfigError: If a value has the wrong type or is out of range.
        """
        config = cls()

        # General settings
        general = data.get("general", {})
        config.default_account = general.get("default_account", "")
        if "mail_root" in general:
            config.mail_root = Path(general["mail_root"]).expanduser()

        # Storage settings
        storage = data.get("storage", {})
        config.storage = StorageConfig(
            hostname=storage.get("hostname", ""),
            fsync=storage.get("fsync", True),
            delivery_attempts=storage.get("delivery_attempts", 3),
        )
        if not isinstance(config.storage.delivery_attempts, int) or config.storage.delivery_attempts < 1:
            raise ConfigError(
                f"storage.delivery_attempts must be a positive integer, "
                f"got {config.storage.delivery_attempts!r}"
            )

        # Accounts - each key under [accounts] is an account name
        accounts_data = data.get("accounts", {})
        for name, acct_data in accounts_data.items():
            folders = acct_data.get("folders", {})
            if not isinstance(folders, dict):
                raise ConfigError(f"accounts.{name}.folders must be a table")
            root = acct_data.get("root")
            config.accounts[name] = AccountConfig(
                name=name,
                root=Path(root).expanduser() if root else None,
                folders={str(k): str(v) for k, v in folders.items()},
            )

        return config

    def _to_dict(self) -> dict[str, Any]:
        """
        Convert Config to a dictionary for TOML serialization.
        """
        data: dict[str, Any] = {}

        # General settings
        data["general"] = {
            "default_account": self.default_account,
            "mail_root": str(self.mail_root),
        }

        # Storage settings
        data["storage"] = {
            "hostname": self.storage.hostname,
            "fsync": self.storage.fsync,
            "delivery_attempts": self.storage.delivery_attempts,
        }

        # Accounts
        data["accounts"] = {}
        for name, account in self.accounts.items():
            entry: dict[str, Any] = {"folders": dict(account.folders)}
            if account.root is not None:
                entry["root"] = str(account.root)
            data["accounts"][name] = entry

        return data


# =============================================================================
# Exceptions
# =============================================================================

class ConfigError(Exception):
    """Raised when there's an error loading or parsing configuration."""
    pass
