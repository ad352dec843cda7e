# config_reader.py
# -------------------------------------------------------------
# Reads the flat "Key: value" configuration file.
# Exposes: read_config(path) -> ConfigParameters
# -------------------------------------------------------------

import logging
import os
import re

from models import ConfigError, ConfigKeyMissingError, ConfigParameters

LOGGER = logging.getLogger("txn_pipeline.config")

DEFAULT_CONFIG_PATH = "app_config.txt"

# config key → ConfigParameters field
FOLDER_KEYS = {
    "InputFolder": "input_folder",
    "ErrorFolder": "error_folder",
    "ArchiveFolder": "archive_folder",
    "OutputFolder": "output_folder",
}
LINE_COUNT_KEY = "lineNo"


def get_value(content: str, key: str, path: str = DEFAULT_CONFIG_PATH) -> str:
    """
    Return the stripped value of the first "<key>: value" line.
    Raises ConfigKeyMissingError when the key is absent.
    """
    match = re.search(rf"^[ \t]*{re.escape(key)}:[ \t]*(.*)$", content, re.MULTILINE)
    if match is None:
        LOGGER.warning("Key '%s' not found in the config file.", key)
        raise ConfigKeyMissingError(key, path)
    return match.group(1).strip()


def read_config(path: str = DEFAULT_CONFIG_PATH) -> ConfigParameters:
    """
    Read the config file from disk. Nothing is cached: every call re-reads the
    file, so two calls over an unchanged file return equal snapshots.
    """
    np_path = os.path.normpath(path)
    if not os.path.exists(np_path):
        raise ConfigError(f"Missing config file: {np_path}")
    with open(np_path, "r", encoding="utf-8") as f:
        content = f.read()

    folders = {field: get_value(content, key, np_path) for key, field in FOLDER_KEYS.items()}

    raw_lines = get_value(content, LINE_COUNT_KEY, np_path)
    try:
        num_of_lines = int(raw_lines)
    except ValueError as e:
        raise ConfigError(f"'{LINE_COUNT_KEY}' must be an integer, got {raw_lines!r}") from e
    if num_of_lines <= 0:
        raise ConfigError(f"'{LINE_COUNT_KEY}' must be a positive integer, got {num_of_lines}")

    return ConfigParameters(num_of_lines=num_of_lines, **folders)
