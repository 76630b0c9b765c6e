# cli entrypoint
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import IO, Iterable, List, Optional

from .config import build_arg_parser, load_config_and_args
from .decoder import decode
from .history import HistoryTracker
from .logging_utils import setup_logging
from .sinks import OutputSink, build_sink
from .validation import validate_run_config

log = logging.getLogger(__name__)

EXAMPLE_MESSAGES: List[str] = [
    "RUN_NO____123#",
    "POLAR_NO__2#",
    "USR_MSG___Start Tunnel#",
    "D_USR_FLD_Parameter1,0.004947,Parameter2,0.203044,#",
    "RUN_NO____124#",
    "POLAR_NO__3#",
    "D_USR_FLD_Parameter3,0.02347,Parameter4,0.12343044,ParameterT,1.12345,#",
    "HISTORY___#",
    # Unknown opcode, bad run number, missing terminator.
    "UNKNOWN___test#",
    "RUN_NO____ABC#",
    "RUN_NO____123",
]


def _decode_all(messages: Iterable[str], history: HistoryTracker, sink: OutputSink) -> int:
    count = 0
    for message in messages:
        decode(message, history, sink)
        count += 1
    return count


def _read_messages_file(path: Path) -> List[str]:
    """Load non-blank lines from a message file, line endings removed."""
    with path.open("r", encoding="utf-8") as f:
        return [line.rstrip("\r\n") for line in f if line.strip()]


def _interactive_loop(
    history: HistoryTracker,
    sink: OutputSink,
    exit_command: str,
    stdin: Optional[IO[str]] = None,
) -> None:
    stream = stdin or sys.stdin
    # Undecodable bytes become U+FFFD instead of ending the session.
    if hasattr(stream, "reconfigure"):
        stream.reconfigure(errors="replace")
    print(f"Enter command messages (type {exit_command} to quit):")
    for line in stream:
        message = line.rstrip("\r\n")
        if message == exit_command:
            break
        decode(message, history, sink)
    else:
        log.debug("Input closed before %s", exit_command)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the Command Manager console."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    run_config = load_config_and_args(args)
    validation_errors = validate_run_config(run_config)
    if validation_errors:
        for error in validation_errors:
            print(f"ERROR: {error}")
        raise SystemExit("Validation failed; fix configuration before running.")

    history = HistoryTracker()
    sink = build_sink(run_config.sink)

    if run_config.run_examples:
        print("Running example Command Manager messages...\n")
        _decode_all(EXAMPLE_MESSAGES, history, sink)

    if run_config.messages_file is not None:
        try:
            messages = _read_messages_file(run_config.messages_file)
        except (OSError, UnicodeDecodeError) as e:
            raise SystemExit(f"Failed to read messages file {run_config.messages_file}: {e}") from e
        count = _decode_all(messages, history, sink)
        log.info("Replayed %d messages from %s", count, run_config.messages_file)

    if run_config.interactive:
        _interactive_loop(history, sink, run_config.exit_command)


if __name__ == "__main__":
    main()
