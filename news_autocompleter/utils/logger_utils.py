# logger_utils.py -  for logging messages and performance metrics, timestamps etc

import os
import sys
import time
from datetime import datetime

# Directory where log files are stored unless NEWS_SUGGEST_LOG_PATH says otherwise
LOG_DIR = "logs"

# Path to the default log file, can be overriden
DEFAULT_LOG_PATH = os.path.join(LOG_DIR, "news_autocompleter.log")

LEVELS = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40}


class Log:
    """Lightweight logger for writing messages and tracking metrics."""
    COLORS = {
        "DEBUG": "\033[90m",   # gray
        "INFO": "\033[94m",    # blue
        "WARNING": "\033[93m", # yellow
        "ERROR": "\033[91m",   # red
        "RESET": "\033[0m",
    }

    def __init__(self, path: str = None, use_color: bool = True, level: str = "INFO"):
        self.path = path
        self.use_color = use_color
        self.level = level

    @property
    def level(self) -> str:
        return self._level

    @level.setter
    def level(self, value: str) -> None:
        value = str(value).upper()
        if value not in LEVELS:
            raise ValueError(f"unknown log level: {value}")
        self._level = value

    def resolve_path(self) -> str:
        """Log file path: explicit path, then NEWS_SUGGEST_LOG_PATH, then the default."""
        return self.path or os.getenv("NEWS_SUGGEST_LOG_PATH") or DEFAULT_LOG_PATH

    def write(self, level: str, msg: str):
        """
        Append a log message to the log file with a timestamp.
        Each entry is written as: [YYYY-MM-DD HH:MM:SS] LEVEL   | message
        Messages below the configured level are dropped.
        """
        if LEVELS.get(level, 0) < LEVELS[self._level]:
            return

        ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        line = f"[{ts}] {level:<7} | {msg}"

        path = self.resolve_path()
        folder = os.path.dirname(path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write(line + "\n")

        # echo to console, stderr keeps stdout clean for CLI/JSON output
        if self.use_color and level in self.COLORS:
            print(f"{self.COLORS[level]}{line}{self.COLORS['RESET']}", file=sys.stderr)
        else:
            print(line, file=sys.stderr)

    # Public logging methods
    def debug(self, msg: str):
        self.write("DEBUG", msg)

    def info(self, msg: str):
        self.write("INFO", msg)

    def warning(self, msg: str):
        self.write("WARNING", msg)

    def error(self, msg: str):
        self.write("ERROR", msg)

    def metric(self, tag, value, unit=""):
        """
        Record a metric (like timing, counts, or performance stats).
        Example: [2025-01-01 12:45:02] INFO    | index build done: 0.123s
        """
        self.info(f"{tag}: {value}{unit}")

    def time_block(self, label):
        """
        Helper for measuring execution time of a code block.
        To use:
            with log.time_block("dictionary build"):
                do_some_work()
        It automatically logs how long the block took.
        """
        return _Timer(self, label)


class _Timer:
    """Context manager used internally to measure time for a code block."""
    def __init__(self, log: Log, label):
        self.log = log
        self.label = label
        self.start = time.perf_counter()
        self.elapsed = 0.0

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        """When exiting the 'with' block, calculate how long it took and record it as a metric. """
        self.elapsed = time.perf_counter() - self.start
        self.log.metric(f"{self.label} done", round(self.elapsed, 3), "s")


# shared project logger, level adjusted from Config at startup
log = Log()
