"""Configuration management with XDG paths, atomic writes, and precedence resolution.

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.storefetch/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Global config** -- a single :class:`~storefetch.models.GlobalConfig`
  JSON file holding the base URL, cache, request and output defaults.
* **Precedence resolution** -- :func:`resolve_config` layers environment
  variables and CLI flags over the file.

Writes use a temp-file-then-rename strategy (:func:`_atomic_write`).
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from storefetch.exceptions import ConfigError
from storefetch.models import GlobalConfig

_APP_NAME = "storefetch"
_CONFIG_FILENAME = "config.json"

ENV_BASE_URL = "STOREFETCH_BASE_URL"
ENV_CACHE_TTL = "STOREFETCH_CACHE_TTL_MS"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/storefetch/`` (default
    ``~/.config/storefetch/``). On macOS/Windows: ``~/.storefetch/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/storefetch/`` (default
    ``~/.local/share/storefetch/``). On macOS/Windows: ``~/.storefetch/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file lives in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX. On any failure the temp
    file is removed and the error re-raised.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Global config ---


def config_path() -> Path:
    """Path to the global config file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration.

    Returns:
        The deserialised :class:`~storefetch.models.GlobalConfig`, or a
        default instance if the file does not exist.

    Raises:
        ConfigError: If the file contains invalid JSON or fails validation.
    """
    path = config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return GlobalConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically to disk."""
    data = config.model_dump(mode="json")
    _atomic_write(config_path(), json.dumps(data, indent=2) + "\n")


# --- Precedence resolution ---


def resolve_config(
    cli_base_url: Optional[str] = None,
    cli_format: Optional[str] = None,
) -> GlobalConfig:
    """Resolve the effective configuration.

    Precedence (high to low):
        1. CLI flags (``cli_base_url``, ``cli_format``)
        2. Environment variables (``STOREFETCH_BASE_URL``,
           ``STOREFETCH_CACHE_TTL_MS``)
        3. User config (``~/.config/storefetch/config.json``)
        4. Defaults

    Raises:
        ConfigError: If the config file is invalid or
            ``STOREFETCH_CACHE_TTL_MS`` is not a positive integer.
    """
    config = load_global_config()

    env_base_url = os.environ.get(ENV_BASE_URL)
    if cli_base_url is not None:
        config.base_url = cli_base_url
    elif env_base_url:
        config.base_url = env_base_url

    env_ttl = os.environ.get(ENV_CACHE_TTL)
    if env_ttl:
        try:
            ttl = int(env_ttl)
        except ValueError:
            raise ConfigError(f"{ENV_CACHE_TTL} must be an integer, got: {env_ttl}") from None
        if ttl <= 0:
            raise ConfigError(f"{ENV_CACHE_TTL} must be positive, got: {ttl}")
        config.cache.default_ttl_ms = ttl

    if cli_format is not None:
        config.output.format = cli_format

    return config
