import io
import logging

from cmdmanager.logging_utils import RepeatCollapsingHandler, setup_logging


def _reset_logging_root():
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)


def test_setup_logging_sets_level_and_format():
    _reset_logging_root()

    buf = io.StringIO()
    setup_logging("debug", stream=buf)

    logger = logging.getLogger("test_logger")
    assert logger.isEnabledFor(logging.DEBUG)
    handler = logging.root.handlers[0]
    assert isinstance(handler, RepeatCollapsingHandler)
    assert "%(levelname)s" in handler.formatter._fmt


def test_unknown_level_falls_back_to_info():
    _reset_logging_root()
    setup_logging("chatty", stream=io.StringIO())
    assert logging.root.level == logging.INFO


def test_repeated_messages_are_collapsed():
    _reset_logging_root()

    buf = io.StringIO()
    setup_logging("info", stream=buf)
    logger = logging.getLogger("collapse")

    logger.info("discarded frame")
    logger.info("discarded frame")
    logger.info("discarded frame")
    logger.info("dispatched")

    logging.root.handlers[0].close()
    output = buf.getvalue().splitlines()

    assert len(output) == 2
    assert output[0].endswith("discarded frame (x3)")
    assert output[1].endswith("dispatched")


def test_single_message_has_no_repeat_suffix():
    buf = io.StringIO()
    handler = RepeatCollapsingHandler(buf)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger = logging.getLogger("collapse.single")
    logger.propagate = False
    logger.addHandler(handler)
    try:
        logger.warning("once")
    finally:
        logger.removeHandler(handler)
        logger.propagate = True
        handler.close()
    assert buf.getvalue() == "once\n"


def test_logging_sink_lines_are_never_collapsed():
    from cmdmanager.decoder import decode
    from cmdmanager.history import HistoryTracker
    from cmdmanager.sinks import LoggingSink

    _reset_logging_root()

    buf = io.StringIO()
    setup_logging("info", stream=buf)
    history = HistoryTracker()
    sink = LoggingSink()

    decode("RUN_NO____1#", history, sink)
    decode("RUN_NO____1#", history, sink)
    decode("HISTORY___#", history, sink)
    decode("HISTORY___#", history, sink)

    logging.root.handlers[0].close()
    output = buf.getvalue().splitlines()

    assert len(output) == 6
    assert sum(line.endswith("Run number: 1") for line in output) == 2
    assert sum(line.endswith("cmdmanager.sinks: RUN_NO____") for line in output) == 4
    assert not any("(x" in line for line in output)


def test_kept_repeats_finish_a_pending_run():
    _reset_logging_root()

    buf = io.StringIO()
    setup_logging("info", stream=buf)
    logger = logging.getLogger("collapse.mixed")

    logger.info("tick")
    logger.info("tick")
    logger.info("line", extra={"keep_repeats": True})
    logger.info("line", extra={"keep_repeats": True})

    logging.root.handlers[0].close()
    output = buf.getvalue().splitlines()

    assert len(output) == 3
    assert output[0].endswith("tick (x2)")
    assert output[1].endswith("line")
    assert output[2].endswith("line")
