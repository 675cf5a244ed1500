# utils.py
"""
Utility functions for the simulation framework.

This module provides helper functions, such as logging setup and config
loading, that are used across the application but do not belong to the
physics itself.
"""
import logging
import logging.handlers
import json
import os
from typing import Dict, Any, Tuple

from params import ParameterSet

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary containing a "logging" key with "level",
#       "format", and "log_file" sub-keys. All are optional.
#   - Outputs: None
#   - Side Effects: Configures the root Python logger. Creates a log
#     directory if it doesn't exist. Sets up a console handler and a
#     rotating file handler.
#
# load_config(path: str) -> Dict[str, Any]:
#   - Raises: FileNotFoundError, json.JSONDecodeError (logged first).
#
# parse_config(config: Dict[str, Any]) -> (ParameterSet, Dict[str, Any]):
#   - Outputs: validated physics parameters and the "run_control" section.
#   - Raises: ConfigurationError on invalid simulation parameters.

DEFAULT_LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
DEFAULT_LOG_FILE = 'logs/galaxy.log'


def setup_logging(config: Dict[str, Any]) -> None:
    """
    Configures the logging system from a configuration dictionary.

    Sets up logging to both the console and a rotating file.
    """
    log_config = config.get('logging', {})
    log_level = log_config.get('level', 'INFO').upper()
    log_format = log_config.get('format', DEFAULT_LOG_FORMAT)
    log_file_path = log_config.get('log_file', DEFAULT_LOG_FILE)

    log_dir = os.path.dirname(log_file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Clear existing handlers to avoid duplication on re-setup
    if logger.hasHandlers():
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Rotates at 1MB, keeps 5 backups.
    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path, maxBytes=1024*1024, backupCount=5
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    logging.info("Logging system initialized.")
    logging.debug(f"Log level set to {log_level}, writing to {log_file_path}.")


def load_config(path: str) -> Dict[str, Any]:
    """Loads a JSON configuration file."""
    logging.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
    except FileNotFoundError:
        logging.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logging.error(f"Error decoding JSON from {path}.")
        raise
    logging.info("Configuration loaded successfully.")
    return config


def parse_config(config: Dict[str, Any]) -> Tuple[ParameterSet, Dict[str, Any]]:
    """Splits a loaded config into a validated ParameterSet and run controls."""
    params = ParameterSet.from_dict(config.get('simulation_parameters', {}))
    run_control = config.get('run_control', {})
    return params, run_control
