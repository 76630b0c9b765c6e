# validation.py
from __future__ import annotations

from typing import List

from .config import RunConfig

VALID_SINKS = ("console", "log")


def validate_exit_command(run_config: RunConfig) -> List[str]:
    errors: List[str] = []
    if not run_config.exit_command.strip():
        errors.append("exit_command must not be empty")
    elif run_config.exit_command.endswith("#"):
        errors.append("exit_command must not end with '#' (it would be read as a message)")
    return errors


def validate_sink(run_config: RunConfig) -> List[str]:
    if run_config.sink not in VALID_SINKS:
        return [f"sink must be one of {list(VALID_SINKS)}, got {run_config.sink!r}"]
    return []


def validate_messages_file(run_config: RunConfig) -> List[str]:
    path = run_config.messages_file
    if path is None:
        return []
    if not path.is_file():
        return [f"messages_file not found: {path}"]
    return []


def validate_run_config(run_config: RunConfig) -> List[str]:
    errors: List[str] = []
    errors += validate_exit_command(run_config)
    errors += validate_sink(run_config)
    errors += validate_messages_file(run_config)
    return errors
