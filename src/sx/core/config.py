"""User configuration for sx.

Example ~/.config/sx/config.toml:

    lock_file = "sx.lock"
    cache_dir = "~/.cache/sx"
    concurrency = 10
    install_timeout_seconds = 1800
    clients = ["claude-code"]
"""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

from sx.core.errors import SxError

CONFIG_DIR_ENV_VAR = "SX_CONFIG_DIR"
CONFIG_FILE_NAME = "config.toml"

DEFAULT_LOCK_FILE = "sx.lock"
DEFAULT_CONCURRENCY = 10
DEFAULT_INSTALL_TIMEOUT_SECONDS = 30 * 60


class ConfigError(SxError):
    """config.toml is malformed."""


@dataclass(frozen=True)
class SxConfig:
    """Loaded configuration.

    Attributes:
        lock_file: Lock file path; relative paths resolve against the cwd
        cache_dir: Directory for the installation tracker
        concurrency: Maximum concurrent fetches
        install_timeout_seconds: Deadline for a whole install run
        clients: Client IDs to install to, None to use every detected client
    """

    lock_file: Path
    cache_dir: Path
    concurrency: int
    install_timeout_seconds: int
    clients: tuple[str, ...] | None


def default_config_dir(home: Path) -> Path:
    override = os.environ.get(CONFIG_DIR_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return home / ".config" / "sx"


def default_config(home: Path) -> SxConfig:
    return SxConfig(
        lock_file=Path(DEFAULT_LOCK_FILE),
        cache_dir=home / ".cache" / "sx",
        concurrency=DEFAULT_CONCURRENCY,
        install_timeout_seconds=DEFAULT_INSTALL_TIMEOUT_SECONDS,
        clients=None,
    )


def load_config(config_dir: Path, *, home: Path) -> SxConfig:
    """Load config.toml from config_dir if present; otherwise return defaults.

    Raises:
        ConfigError: If the file is not valid TOML or a value has the wrong type
    """
    defaults = default_config(home)
    cfg_path = config_dir / CONFIG_FILE_NAME
    if not cfg_path.exists():
        return defaults

    try:
        data = tomllib.loads(cfg_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Failed to parse {cfg_path}: {e}") from e

    concurrency = data.get("concurrency", defaults.concurrency)
    if not isinstance(concurrency, int) or concurrency < 1:
        raise ConfigError(f"{cfg_path}: concurrency must be a positive integer")

    timeout = data.get("install_timeout_seconds", defaults.install_timeout_seconds)
    if not isinstance(timeout, int) or timeout < 1:
        raise ConfigError(f"{cfg_path}: install_timeout_seconds must be a positive integer")

    clients = data.get("clients")
    if clients is not None:
        if not isinstance(clients, list):
            raise ConfigError(f"{cfg_path}: clients must be a list of client IDs")
        clients = tuple(str(c) for c in clients)

    lock_file = data.get("lock_file")
    cache_dir = data.get("cache_dir")
    return SxConfig(
        lock_file=Path(lock_file).expanduser() if lock_file else defaults.lock_file,
        cache_dir=Path(cache_dir).expanduser() if cache_dir else defaults.cache_dir,
        concurrency=concurrency,
        install_timeout_seconds=timeout,
        clients=clients,
    )
