from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any

from kamisado.infra.paths import DEFAULT_CONFIG_FILE, SETTING_PATH

logger = logging.getLogger(__name__)

LOCAL_FILENAMES = ["settings.toml", "settings.json"]


def _resolve_config_path(config_path: str | Path | None) -> Path | None:
    """
    Find the settings file to load.

    Lookup order:
        1. ``config_path``, when given (a missing file is an error)
        2. ``settings.toml`` / ``settings.json`` in the working directory
        3. ``SETTING_PATH`` in the per-user config directory

    Args:
        config_path: Optional file path explicitly provided by the caller.

    Returns:
        The resolved path, or None when no candidate exists.

    Raises:
        FileNotFoundError: If ``config_path`` is given but does not exist.
    """
    if config_path:
        path = Path(config_path).expanduser().resolve()
        if not path.is_file():
            logger.warning("Specified config file not found: %s", path)
            raise FileNotFoundError(f"Config file not found: {path}")
        return path

    for name in LOCAL_FILENAMES:
        local_path = (Path.cwd() / name).resolve()
        if local_path.is_file():
            logger.debug("Using local config file: %s", local_path)
            return local_path

    if SETTING_PATH.is_file():
        return SETTING_PATH.resolve()

    return None


def _read_config_file(path: Path) -> dict[str, Any]:
    """
    Parse a ``.toml`` or ``.json`` settings file.

    Args:
        path: Path to the configuration file.

    Returns:
        Parsed configuration data.

    Raises:
        ValueError: If the extension is unsupported, parsing fails, or the
            root element is not a table/object.
    """
    ext = path.suffix.lower()

    if ext == ".toml":
        try:
            with path.open("rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ValueError(f"Invalid TOML in {path}: {e}") from e

    elif ext == ".json":
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e

    else:
        raise ValueError(f"Unsupported config file extension: {ext}")

    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a dict, got {type(data)} in {path}")

    return data


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """
    Load the settings mapping.

    Args:
        config_path: Optional explicit configuration file path.

    Returns:
        Parsed configuration as a dictionary.

    Raises:
        FileNotFoundError: If no configuration file can be found.
        ValueError: If the file cannot be parsed.
    """
    path = _resolve_config_path(config_path)
    if path is None:
        raise FileNotFoundError("No valid config file found.")

    logger.debug("Loading configuration from: %s", path)
    return _read_config_file(path)


def copy_default_config(target: Path) -> None:
    """
    Write the bundled sample settings to ``target``.

    Args:
        target: Destination path; parent directories are created.
    """
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(DEFAULT_CONFIG_FILE.read_bytes())
    logger.info("Sample configuration copied to: %s", target)


def save_config(
    config: dict[str, Any],
    output_path: str | Path = SETTING_PATH,
) -> None:
    """
    Store a settings mapping as JSON.

    Args:
        config: Configuration mapping.
        output_path: Destination path. Defaults to the per-user settings file.

    Raises:
        OSError: If writing to disk fails.
    """
    output = Path(output_path).expanduser().resolve()
    output.parent.mkdir(parents=True, exist_ok=True)

    try:
        output.write_text(
            json.dumps(config, indent=2, ensure_ascii=False), encoding="utf-8"
        )
    except OSError as e:
        logger.error("Failed to write config JSON '%s': %s", output, e)
        raise

    logger.info("Configuration saved to JSON: %s", output)


def save_config_file(
    source_path: str | Path, output_path: str | Path = SETTING_PATH
) -> None:
    """
    Import a TOML/JSON settings file as the per-user JSON settings.

    Args:
        source_path: Path to the source TOML/JSON file.
        output_path: Path to the output JSON file.

    Raises:
        FileNotFoundError: If the source file does not exist.
        ValueError: If the source file cannot be parsed.
    """
    source = Path(source_path).expanduser().resolve()
    if not source.is_file():
        raise FileNotFoundError(f"Source file not found: {source}")

    save_config(_read_config_file(source), output_path)
