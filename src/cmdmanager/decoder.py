# decoder.py
from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from .history import HistoryTracker
from .model import (
    MAX_PARAMETER_NAME_LENGTH,
    DecodeOutcome,
    Opcode,
    ParameterPair,
)
from .parsing import format_value, parse_float, parse_int, split_frame, tokenize_parameters
from .sinks import ConsoleSink, OutputSink

log = logging.getLogger(__name__)

Emit = Callable[[str], None]


def _decode_run_number(payload: str, history: HistoryTracker, emit: Emit) -> None:
    result = parse_int(payload)
    if result.ok:
        emit(f"Run number: {result.value}")
    else:
        log.debug("Run number rejected: %s", result.error)
        emit(f"Invalid Run number: {payload}")


def _decode_polar_number(payload: str, history: HistoryTracker, emit: Emit) -> None:
    result = parse_int(payload)
    if result.ok:
        emit(f"Polar number: {result.value}")
    else:
        log.debug("Polar number rejected: %s", result.error)
        emit(f"Invalid Polar number: {payload}")


def _decode_user_message(payload: str, history: HistoryTracker, emit: Emit) -> None:
    emit(payload)


def decode_parameters(payload: str, emit: Emit) -> List[ParameterPair]:
    """
    Decode a comma separated name,value,... list.

    An odd number of non-empty tokens rejects the whole list without output.
    Otherwise each pair is checked on its own: an over-long name or a
    non-numeric value is reported and the remaining pairs still decode.

    Args:
        payload: Terminator-stripped D_USR_FLD_ payload.
        emit: Line callback for decoded and rejected pairs.

    Returns:
        The pairs that decoded successfully, in input order.
    """
    tokens = tokenize_parameters(payload)
    if len(tokens) % 2 != 0:
        log.debug("Parameter list has odd token count %d; ignored", len(tokens))
        return []

    pairs: List[ParameterPair] = []
    for name, raw_value in zip(tokens[0::2], tokens[1::2]):
        if len(name) > MAX_PARAMETER_NAME_LENGTH:
            emit(f"Parameter name too long: {name}")
            continue
        result = parse_float(raw_value)
        if not result.ok:
            emit(f"Invalid parameter value for parameter: {name}")
            continue
        pair = ParameterPair(name=name, value=result.value)
        pairs.append(pair)
        emit(f"{pair.name} = {format_value(pair.value)}")
    return pairs


def _decode_user_fields(payload: str, history: HistoryTracker, emit: Emit) -> None:
    decode_parameters(payload, emit)


def _report_history(payload: str, history: HistoryTracker, emit: Emit) -> None:
    for opcode in history:
        emit(opcode)


_DISPATCH: Dict[Opcode, Callable[[str, HistoryTracker, Emit], None]] = {
    Opcode.RUN_NO: _decode_run_number,
    Opcode.POLAR_NO: _decode_polar_number,
    Opcode.USR_MSG: _decode_user_message,
    Opcode.D_USR_FLD: _decode_user_fields,
    Opcode.HISTORY: _report_history,
}


def decode(
    message: str,
    history: HistoryTracker,
    sink: Optional[OutputSink] = None,
) -> DecodeOutcome:
    """
    Decode one Command Manager message and act on it.

    Malformed framing is dropped silently; opcode-level problems are reported
    as lines on the sink. Recognized opcodes are recorded in the history after
    dispatch, whether or not their payload decoded.

    Args:
        message: Raw message text ending with '#'.
        history: Caller-owned history record, updated in place.
        sink: Destination for result lines; defaults to stdout.

    Returns:
        DecodeOutcome describing the frame, opcode and emitted lines.

    Raises:
        TypeError: If message is not a string.
    """
    if not isinstance(message, str):
        raise TypeError(f"message must be str, not {type(message).__name__}")

    outcome = DecodeOutcome()
    frame = split_frame(message)
    if frame is None:
        log.debug("Discarding unframed message %r", message)
        return outcome

    outcome.frame = frame
    outcome.opcode = frame.opcode
    handler = _DISPATCH.get(outcome.opcode)
    if handler is None:
        log.debug("Ignoring unknown opcode %r", frame.opcode_text)
        return outcome

    out = sink if sink is not None else ConsoleSink()

    def emit(text: str) -> None:
        outcome.lines.append(text)
        out.write_line(text)

    log.debug("Dispatching %s payload=%r", outcome.opcode.value, frame.payload)
    handler(frame.payload, history, emit)

    if outcome.opcode.recorded:
        history.insert(outcome.opcode.value)
        outcome.recorded = True
    return outcome
