"""Configuration management with XDG paths, atomic writes, and precedence resolution.

The library itself takes a :class:`~nominatim_client.models.ClientConfig`
directly; this module only backs the command-line tool:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.nominatim-client/`` on macOS and Windows. See
  :func:`get_config_dir` and :func:`get_data_dir`.
* **Stored config** -- a single JSON file holding a
  :class:`~nominatim_client.models.ClientConfig`. Managed via
  :func:`load_config`, :func:`save_config`, :func:`reset_config`.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, and the stored config into the effective
  configuration.

File writes use a temp-file-then-rename strategy (:func:`_atomic_write`)
so a crash never leaves a half-written config behind.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from nominatim_client.exceptions import ConfigError
from nominatim_client.models import ClientConfig

_APP_NAME = "nominatim-client"
_CONFIG_FILENAME = "config.json"

ENV_PRODUCT_NAME = "NOMINATIM_CLIENT_PRODUCT_NAME"
ENV_NO_CACHE = "NOMINATIM_CLIENT_NO_CACHE"

_TRUTHY = ("1", "true", "yes", "on")


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

    On Linux/BSD: ``$XDG_CONFIG_HOME/nominatim-client/`` (default
    ``~/.config/nominatim-client/``). On macOS/Windows:
    ``~/.nominatim-client/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/nominatim-client/`` (default
    ``~/.local/share/nominatim-client/``). On macOS/Windows:
    ``~/.nominatim-client/logs/``.
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

    The temporary file is created next to *path* so that ``os.replace`` is
    an atomic rename on POSIX systems. On any failure the temp file is
    removed and the exception re-raised.
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


# --- Stored config ---


def config_path() -> Path:
    """Path to the stored config file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_config() -> ClientConfig:
    """Load the stored client configuration.

    Returns:
        The deserialised :class:`~nominatim_client.models.ClientConfig`,
        or a default instance if the file does not exist.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = config_path()
    if not path.is_file():
        return ClientConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return ClientConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc


def save_config(config: ClientConfig) -> None:
    """Persist *config* atomically to :func:`config_path`."""
    data = config.model_dump(mode="json")
    _atomic_write(config_path(), json.dumps(data, indent=2) + "\n")


def reset_config() -> bool:
    """Delete the stored config file.

    Returns:
        ``True`` if a file was removed, ``False`` if none existed.
    """
    path = config_path()
    if not path.is_file():
        return False
    path.unlink()
    return True


# --- Precedence resolution ---


def resolve_config(
    cli_product_name: Optional[str] = None,
    cli_no_cache: bool = False,
) -> ClientConfig:
    """Resolve the effective client config.

    Precedence (high to low):
        1. CLI flags (``cli_product_name``, ``cli_no_cache``)
        2. Environment variables (``NOMINATIM_CLIENT_PRODUCT_NAME``,
           ``NOMINATIM_CLIENT_NO_CACHE``)
        3. Stored config (``~/.config/nominatim-client/config.json``)
        4. Defaults

    Returns:
        The merged, still immutable, :class:`ClientConfig`.
    """
    config = load_config()
    updates: dict[str, object] = {}

    env_product = os.environ.get(ENV_PRODUCT_NAME)
    if env_product:
        updates["product_name"] = env_product
    if cli_product_name is not None:
        updates["product_name"] = cli_product_name

    env_no_cache = os.environ.get(ENV_NO_CACHE, "").strip().lower() in _TRUTHY
    if cli_no_cache or env_no_cache:
        updates["cache"] = None

    if not updates:
        return config
    return ClientConfig.model_validate({**config.model_dump(), **updates})
