# config.py
from __future__ import annotations

import argparse
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

import logging

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # type: ignore

log = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("cmdmanager.toml")


@dataclass
class RunConfig:
    run_examples: bool
    interactive: bool
    exit_command: str
    messages_file: Optional[Path]
    sink: str
    log_level: str


def build_arg_parser() -> argparse.ArgumentParser:
    """
    Build the CLI argument parser for the message console.

    Returns:
        Configured argparse.ArgumentParser instance.
    """
    p = argparse.ArgumentParser(
        description="Command Manager message parser console",
    )
    p.add_argument(
        "--config",
        type=Path,
        help="TOML config file (defaults to cmdmanager.toml if present)",
    )
    p.add_argument(
        "--examples",
        dest="run_examples",
        action="store_true",
        help="Decode the built-in example messages first (default)",
    )
    p.add_argument(
        "--no-examples",
        dest="run_examples",
        action="store_false",
        help="Skip the built-in example messages",
    )
    p.set_defaults(run_examples=None)
    p.add_argument(
        "--interactive",
        dest="interactive",
        action="store_true",
        help="Read messages from stdin after the other inputs (default)",
    )
    p.add_argument(
        "--no-interactive",
        dest="interactive",
        action="store_false",
        help="Do not read messages from stdin",
    )
    p.set_defaults(interactive=None)
    p.add_argument("--exit-command", help="Input line that ends the interactive loop (default EXIT)")
    p.add_argument(
        "--messages-file",
        type=Path,
        help="Text file of messages, one per line, decoded before the interactive loop",
    )
    p.add_argument("--sink", choices=["console", "log"], help="Where decoded lines are written")

    p.add_argument("--log-level", default="INFO")
    return p


def _load_toml(path: Path) -> dict:
    """
    Load a TOML config file.

    Args:
        path: Path to the TOML file.

    Returns:
        Parsed dictionary.

    Raises:
        FileNotFoundError: If the file is missing.
        tomllib.TOMLDecodeError: On parse errors.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open("rb") as f:
        return tomllib.load(f)


def _dict_get_nested(data: dict, key: str, default=None):
    """Fetch a dotted-path value from a nested dict."""
    parts = key.split(".")
    current_level = data
    for part in parts[:-1]:
        current_level = current_level.get(part, {})
    return current_level.get(parts[-1], default)


def load_config_and_args(args: argparse.Namespace) -> RunConfig:
    """
    Merge CLI args with TOML config into a RunConfig.

    Args:
        args: Parsed argparse namespace.

    Returns:
        RunConfig with harness settings.

    Raises:
        SystemExit: On a missing explicit config or an unreadable one.
    """
    cfg_data: dict = {}
    cfg_path: Optional[Path] = getattr(args, "config", None)
    used_default = False

    if cfg_path is None and DEFAULT_CONFIG_PATH.exists():
        cfg_path = DEFAULT_CONFIG_PATH
        used_default = True

    if cfg_path is not None:
        try:
            cfg_data = _load_toml(cfg_path)
        except FileNotFoundError:
            if not used_default:
                raise SystemExit(f"Config file not found: {cfg_path}")
        except Exception as e:  # TOML parse errors, permission issues, etc.
            raise SystemExit(f"Failed to load config file {cfg_path}: {e}") from e

    run_examples = bool(_dict_get_nested(cfg_data, "harness.run_examples", True))
    interactive = bool(_dict_get_nested(cfg_data, "harness.interactive", True))
    exit_command = str(_dict_get_nested(cfg_data, "harness.exit_command", "EXIT"))
    messages_file = _dict_get_nested(cfg_data, "harness.messages_file", None)
    sink = str(_dict_get_nested(cfg_data, "harness.sink", "console")).lower()

    # CLI overrides
    if getattr(args, "run_examples", None) is not None:
        run_examples = bool(args.run_examples)
    if getattr(args, "interactive", None) is not None:
        interactive = bool(args.interactive)
    if getattr(args, "exit_command", None) is not None:
        exit_command = args.exit_command
    if getattr(args, "messages_file", None) is not None:
        messages_file = args.messages_file
    if getattr(args, "sink", None) is not None:
        sink = args.sink
    if messages_file is not None and not isinstance(messages_file, Path):
        messages_file = Path(messages_file)

    run_config = RunConfig(
        run_examples=run_examples,
        interactive=interactive,
        exit_command=exit_command,
        messages_file=messages_file,
        sink=sink,
        log_level=getattr(args, "log_level", "INFO"),
    )
    log.debug("RunConfig: %s", asdict(run_config))
    return run_config
