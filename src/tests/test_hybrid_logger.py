import io
import logging

from utils import ClassLogger, HybridLogger


def make_logger(tmp_path, name="doorbell.logtest"):
    stream = io.StringIO()
    hybrid = HybridLogger(name, log_dir=str(tmp_path), stream=stream)
    return hybrid, stream


def test_records_carry_component_and_thread(tmp_path):
    hybrid, stream = make_logger(tmp_path)
    hybrid.get_class_logger("Dispatcher", logging.DEBUG).info("Button event! pressed=True")
    hybrid.cleanup()

    line = stream.getvalue().strip()
    assert "[INFO] [MainThread] [Dispatcher] Button event! pressed=True" in line
    # StringIO is not a terminal, so no color codes
    assert "\033[" not in line


def test_component_level_filters_messages(tmp_path):
    hybrid, stream = make_logger(tmp_path)
    quiet = hybrid.get_class_logger("ButtonReader", logging.WARNING)
    quiet.info("press")
    quiet.warning("stuck line")
    hybrid.cleanup()

    output = stream.getvalue()
    assert "press" not in output
    assert "stuck line" in output


def test_error_with_exception_names_type_and_line(tmp_path):
    hybrid, stream = make_logger(tmp_path)
    logger = hybrid.get_class_logger("RPiGPIO")
    try:
        raise OSError("bus error")
    except OSError as e:
        logger.error("Read failed", exception=e)
    hybrid.cleanup()

    output = stream.getvalue()
    assert "Read failed | Type: OSError | File: " in output
    assert "Traceback" in output


def test_log_file_is_written_and_closed(tmp_path):
    hybrid, _ = make_logger(tmp_path, name="doorbell.filetest")
    sibling = hybrid.get_class_logger("Doorbell").create_class_logger("Shutdown")
    sibling.critical("signal SIGTERM")
    sibling.flush()

    assert hybrid.log_file is not None and hybrid.log_file.parent == tmp_path
    assert "[Shutdown] signal SIGTERM" in hybrid.log_file.read_text(encoding="utf-8")

    hybrid.cleanup()
    assert hybrid.main_logger.handlers == []


def test_console_only_skips_log_file(tmp_path):
    hybrid = HybridLogger("doorbell.console", log_dir=str(tmp_path), console_only=True, stream=io.StringIO())
    assert hybrid.log_file is None
    assert list(tmp_path.iterdir()) == []
    hybrid.cleanup()


def test_class_loggers_are_cached_by_name(tmp_path):
    hybrid, _ = make_logger(tmp_path)
    first = hybrid.get_class_logger("Publisher")
    assert hybrid.get_class_logger("Publisher") is first
    assert isinstance(first, ClassLogger)
    hybrid.cleanup()
