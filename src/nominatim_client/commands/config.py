"""Config commands -- view and modify the stored client configuration.

Provides the ``nominatim-client config`` sub-command group for reading,
updating, and resetting the JSON file that holds the CLI's
:class:`~nominatim_client.models.ClientConfig`: product name, request
settings, and cache sizing.
"""

from __future__ import annotations

from typing import Any

import typer

from nominatim_client.output import error, format_response, info, print_data, success, warning

config_app = typer.Typer(no_args_is_help=True)

_NONE_VALUES = ("none", "null", "off")


@config_app.command("show")
def config_show() -> None:
    """Show the stored configuration.

    Example::

        nominatim-client config show
        nominatim-client --json config show
    """
    from nominatim_client.config import config_path, load_config

    config = load_config()
    info(f"Config file: {config_path()}")
    format_response(config.model_dump(mode="json"))


@config_app.command("path")
def config_path_command() -> None:
    """Print the path of the config file."""
    from nominatim_client.config import config_path

    print_data(str(config_path()))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(
        help="Config key (dot notation, e.g. 'cache.success_cache_size')."
    ),
    value: str = typer.Argument(help="Value to set."),
) -> None:
    """Set a configuration value.

    Uses dot notation for nested keys and coerces the value to the type of
    the current field. Setting ``cache`` to ``off`` disables caching and
    ``on`` restores the default cache sizing; any ``cache.*`` key enables
    the cache first. Lifespans accept seconds or ISO 8601 durations.

    Example::

        nominatim-client config set product_name my-geocoder
        nominatim-client config set request.timeout 10
        nominatim-client config set cache.errors_cache_entity_lifespan 600
        nominatim-client config set cache off
    """
    from nominatim_client.config import load_config, save_config
    from nominatim_client.models import CacheConfig, ClientConfig

    data = load_config().model_dump(mode="json")

    if key == "cache":
        if value.lower() in _NONE_VALUES:
            data["cache"] = None
        elif value.lower() in ("on", "default"):
            data["cache"] = CacheConfig().model_dump(mode="json")
        else:
            error("Expected 'on' or 'off' for cache")
            raise typer.Exit(code=2)
        save_config(ClientConfig.model_validate(data))
        success(f"Set cache = {value.lower()}")
        return

    keys = key.split(".")
    if keys[0] == "cache" and data.get("cache") is None:
        warning("Cache was disabled; enabling it with default sizes.")
        data["cache"] = CacheConfig().model_dump(mode="json")

    target = data
    for k in keys[:-1]:
        if k not in target or not isinstance(target[k], dict):
            error(f"Invalid config key: {key}")
            raise typer.Exit(code=2)
        target = target[k]

    final_key = keys[-1]
    if final_key not in target:
        error(f"Unknown config key: {key}")
        raise typer.Exit(code=2)

    coerced = _coerce(final_key, target[final_key], value)
    target[final_key] = coerced

    try:
        new_config = ClientConfig.model_validate(data)
    except ValueError as exc:
        error(f"Validation error: {exc}")
        raise typer.Exit(code=2) from None

    save_config(new_config)
    success(f"Set {key} = {coerced}")


@config_app.command("reset")
def config_reset() -> None:
    """Reset configuration to defaults by deleting the config file."""
    from nominatim_client.config import reset_config

    if reset_config():
        success("Configuration reset to defaults.")
    else:
        info("No stored configuration; defaults already apply.")


def _coerce(field: str, current: Any, value: str) -> Any:
    """Convert *value* to the type of the *current* field value."""
    if isinstance(current, bool):
        return value.lower() in ("true", "1", "yes", "on")
    if isinstance(current, (int, float)):
        try:
            return type(current)(value)
        except ValueError:
            error(f"Expected {type(current).__name__} for {field}, got: {value}")
            raise typer.Exit(code=2) from None
    if field.endswith("_lifespan"):
        try:
            return float(value)
        except ValueError:
            return value
    return value
