"""Config commands -- view and modify the global configuration.

Provides the ``storefetch config`` sub-command group for reading, updating
and resetting the config file (:class:`~storefetch.models.GlobalConfig`).
"""

from __future__ import annotations

import typer

from storefetch.exit_codes import EXIT_INVALID_USAGE
from storefetch.output import error, format_response, info, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Show the configuration stored on disk.

    Example::

        storefetch config show --json
    """
    from storefetch.config import config_path, load_global_config

    config = load_global_config()
    info(f"Config file: {config_path()}")
    format_response(config.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Config key (dot notation, e.g. 'cache.default_ttl_ms')."),
    value: str = typer.Argument(help="Value to set. Use 'null' to unset an optional value."),
) -> None:
    """Set a configuration value.

    The value is coerced to the type of the current value (bool or int) and
    the result is validated before saving.

    Example::

        storefetch config set base_url https://shop.example.com
        storefetch config set cache.default_ttl_ms 120000
        storefetch config set cache.max_entries 500
    """
    from pydantic import ValidationError

    from storefetch.config import load_global_config, save_global_config
    from storefetch.models import GlobalConfig

    config = load_global_config()
    data = config.model_dump(mode="json")

    keys = key.split(".")
    target = data
    for k in keys[:-1]:
        if k not in target or not isinstance(target[k], dict):
            error(f"Invalid config key: {key}")
            raise typer.Exit(code=EXIT_INVALID_USAGE)
        target = target[k]

    final_key = keys[-1]
    if final_key not in target or isinstance(target[final_key], dict):
        error(f"Unknown config key: {key}")
        raise typer.Exit(code=EXIT_INVALID_USAGE)

    current = target[final_key]
    coerced: object
    if value.lower() == "null":
        coerced = None
    elif isinstance(current, bool):
        coerced = value.lower() in ("true", "1", "yes")
    elif isinstance(current, int):
        try:
            coerced = int(value)
        except ValueError:
            error(f"Expected integer for {key}, got: {value}")
            raise typer.Exit(code=EXIT_INVALID_USAGE) from None
    else:
        # Optional fields (None) take the raw string; pydantic coerces it.
        coerced = value

    target[final_key] = coerced

    try:
        new_config = GlobalConfig.model_validate(data)
    except ValidationError as exc:
        error(f"Validation error: {exc}")
        raise typer.Exit(code=EXIT_INVALID_USAGE) from None

    save_global_config(new_config)
    success(f"Set {key} = {coerced}")


@config_app.command("reset")
def config_reset(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation."),
) -> None:
    """Reset the configuration to defaults.

    Example::

        storefetch config reset --force
    """
    from storefetch.config import save_global_config
    from storefetch.models import GlobalConfig

    if not force and not typer.confirm("Reset all config to defaults?"):
        info("Cancelled.")
        raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Configuration reset to defaults.")
