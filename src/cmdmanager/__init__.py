from .decoder import decode, decode_parameters
from .history import HistoryTracker
from .model import DecodeOutcome, Opcode, ParameterPair, ParseResult
from .sinks import ConsoleSink, ListSink, LoggingSink, OutputSink

__all__ = [
    "decode",
    "decode_parameters",
    "HistoryTracker",
    "DecodeOutcome",
    "Opcode",
    "ParameterPair",
    "ParseResult",
    "OutputSink",
    "ConsoleSink",
    "ListSink",
    "LoggingSink",
]
