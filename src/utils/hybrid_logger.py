import logging
import sys
import traceback
from contextlib import suppress
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, TextIO

# [time] [level] [thread] [component] message
LOG_FORMAT = '[%(asctime)s] [%(levelname)s] [%(threadName)s] [%(class_name)s] %(message)s'

LEVEL_COLORS = {
    logging.DEBUG: '\033[94m',     # Blue
    logging.INFO: '\033[92m',      # Green
    logging.WARNING: '\033[93m',   # Yellow
    logging.ERROR: '\033[91m',     # Red
    logging.CRITICAL: '\033[95m',  # Magenta
}
RESET = '\033[0m'


class ColoredFormatter(logging.Formatter):
    """Bracketed doorbell log layout, colored per level on terminals"""

    def __init__(self, use_colors: bool = False):
        super().__init__(LOG_FORMAT)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        # Records from plain logging calls (paho, pytest) have no component
        if not hasattr(record, 'class_name'):
            record.class_name = record.name
        line = super().format(record)
        if not self.use_colors:
            return line
        return f"{LEVEL_COLORS.get(record.levelno, RESET)}{line}{RESET}"


def describe_exception(exception: BaseException) -> str:
    """' | Type: X | File: f | Line: n' for the frame that raised"""
    frames = traceback.extract_tb(exception.__traceback__)
    if frames:
        origin = frames[-1]
        return f" | Type: {type(exception).__name__} | File: {origin.filename} | Line: {origin.lineno}"
    return f" | Type: {type(exception).__name__}"


class ClassLogger:
    """
    Component logger: tags every record with a component name and applies
    its own level on top of the shared logger's handlers.

    Components hand out siblings with create_class_logger() so the whole
    doorbell writes through the handlers HybridLogger configured.
    """

    def __init__(self, main_logger: logging.Logger, class_name: str, level: int):
        self.main_logger = main_logger
        self.class_name = class_name
        self.level = level

    def _log(self, level: int, message: str, exception: Optional[BaseException] = None) -> None:
        if level < self.level:
            return
        exc_info = None
        if exception is not None:
            message += describe_exception(exception)
            exc_info = (type(exception), exception, exception.__traceback__)
        record = self.main_logger.makeRecord(
            self.main_logger.name, level, "", 0, message, (), exc_info
        )
        record.class_name = self.class_name
        self.main_logger.handle(record)

    def debug(self, message: str) -> None:
        self._log(logging.DEBUG, message)

    def info(self, message: str) -> None:
        self._log(logging.INFO, message)

    def warning(self, message: str) -> None:
        self._log(logging.WARNING, message)

    def error(self, message: str, exception: Optional[BaseException] = None) -> None:
        """Log an error; with an exception the raising file/line and traceback are attached"""
        self._log(logging.ERROR, message, exception)

    def critical(self, message: str) -> None:
        self._log(logging.CRITICAL, message)

    def flush(self) -> None:
        """Push buffered records out, e.g. before the GPIO is released on shutdown"""
        for handler in self.main_logger.handlers:
            with suppress(OSError, ValueError):
                handler.flush()

    def create_class_logger(self, class_name: str, level: int = logging.INFO) -> "ClassLogger":
        return ClassLogger(self.main_logger, class_name, level)


class HybridLogger:
    """
    Sets up the doorbell's shared logger: console output (colored when it
    is a terminal) and, when `log_dir` is given, a timestamped log file.
    """

    def __init__(self,
                 name: str = "doorbell",
                 log_dir: Optional[str] = "logs",
                 console_only: bool = False,
                 stream: Optional[TextIO] = None):
        self.name = name
        self.log_dir = None if console_only else log_dir
        self.log_file: Optional[Path] = None
        self.class_loggers: Dict[str, ClassLogger] = {}

        self.main_logger = logging.getLogger(name)
        self.main_logger.setLevel(logging.DEBUG)
        self.main_logger.handlers.clear()
        for handler in self._create_handlers(stream or sys.stdout):
            self.main_logger.addHandler(handler)

    def _create_handlers(self, stream: TextIO) -> List[logging.Handler]:
        console = logging.StreamHandler(stream)
        console.setFormatter(ColoredFormatter(use_colors=stream.isatty()))
        handlers: List[logging.Handler] = [console]

        if self.log_dir:
            Path(self.log_dir).mkdir(parents=True, exist_ok=True)
            stamp = datetime.now().strftime('%Y-%m-%d_%H-%M-%S')
            self.log_file = Path(self.log_dir) / f"{self.name}_{stamp}.log"
            log_file_handler = logging.FileHandler(self.log_file, encoding="utf-8")
            log_file_handler.setFormatter(ColoredFormatter(use_colors=False))
            handlers.append(log_file_handler)
        return handlers

    def get_class_logger(self, class_name: str, level: int = logging.INFO) -> ClassLogger:
        """
        Component logger, cached by name.

        Args:
            class_name: Shown in the [component] column
            level: Minimum level for this component
        """
        if class_name not in self.class_loggers:
            self.class_loggers[class_name] = ClassLogger(self.main_logger, class_name, level)
        return self.class_loggers[class_name]

    def cleanup(self) -> None:
        """Flush and close every handler"""
        for handler in list(self.main_logger.handlers):
            with suppress(OSError, ValueError):
                handler.flush()
                handler.close()
        self.main_logger.handlers.clear()
