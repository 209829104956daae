#!/usr/bin/env python3
"""
JSON File Helpers

The account mapping is the only JSON file the tool reads and writes. Files
are written pretty-printed and UTF-8 encoded with non-ASCII kept readable
(account names like "Sparekonto Bjørn"). Every I/O or decode failure comes
back as ConfigError naming the file.
"""

import json
from pathlib import Path
from typing import Any

from .errors import ConfigError


def write_json(filepath: str | Path, data: Any, description: str = "JSON file") -> None:
    """
    Write data as indented UTF-8 JSON, creating parent directories.

    Raises:
        ConfigError: If the file cannot be written
    """
    filepath = Path(filepath)
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.write("\n")
    except OSError as e:
        raise ConfigError(f"Could not write {description.lower()} {filepath}: {e}") from e


def read_json(filepath: str | Path, description: str = "JSON file") -> Any:
    """
    Read and decode a UTF-8 JSON file.

    Raises:
        ConfigError: If the file is missing, unreadable or not valid JSON
    """
    filepath = Path(filepath)
    try:
        with open(filepath, encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"{description} not found: {filepath}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"{description} is not valid JSON: {filepath}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Could not read {description.lower()} {filepath}: {e}") from e
