"""Structured event logger for the scheduler.

Every message is an upper-case event name plus keyword context, for example
``SOC_ENERGY_CALCULATED | appliance_id=F-001 | energy_wh=33000``.

Messages always go to the standard ``logging`` hierarchy under
``custom_components.smart_charge_scheduler``. Optionally each event is also
appended as one JSON line to a daily file (``log_dir/YEAR/MONTH/DAY/events.log``).
Those writes happen on a background thread so that callers on the Home
Assistant event loop never block on disk I/O.
"""

from __future__ import annotations

import atexit
import json
import logging
import queue
import threading
from datetime import datetime
from pathlib import Path
from typing import Any

from ..const import DAILY_LOG_FILENAME, DOMAIN, LOGGER_NAME

_LOGGER = logging.getLogger(__name__)


class SchedulerLogger:
    """Event logger used by requests, calculators and adapters.

    Instances are cheap and can be injected per component; ``get_logger()``
    returns the shared default instance.
    """

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    DEBUG = "debug"

    _LEVELS = {
        ERROR: logging.ERROR,
        WARNING: logging.WARNING,
        INFO: logging.INFO,
        DEBUG: logging.DEBUG,
    }

    def __init__(
        self,
        name: str = LOGGER_NAME,
        log_dir: Path | None = None,
        file_logging_enabled: bool = False,
    ) -> None:
        """Initialize the logger.

        Args:
            name: Child logger name below the integration's logger
            log_dir: Base directory for daily structured logs
            file_logging_enabled: Whether to write daily structured logs
        """
        self.name = name
        if log_dir is None:
            log_dir = Path(__file__).parent.parent / "log"
        self.log_dir = log_dir

        self._logger = logging.getLogger(f"custom_components.{DOMAIN}.{name}")
        self._file_logging_enabled = file_logging_enabled

        self._write_queue: queue.Queue = queue.Queue()
        self._shutdown_event = threading.Event()
        self._writer_thread: threading.Thread | None = None

        if file_logging_enabled:
            self._start_writer_thread()

    # ========== Background writer ==========

    def _start_writer_thread(self) -> None:
        """Start the daily log writer thread if it is not running."""
        if self._writer_thread is not None and self._writer_thread.is_alive():
            return

        self._shutdown_event.clear()
        self._writer_thread = threading.Thread(
            target=self._writer_loop,
            name="SchedulerLogWriter",
            daemon=True,
        )
        self._writer_thread.start()
        atexit.register(self.shutdown)

    def shutdown(self) -> None:
        """Flush pending entries and stop the writer thread."""
        if self._writer_thread is None:
            return

        self._shutdown_event.set()
        self._write_queue.put(None)
        self._writer_thread.join(timeout=2.0)
        self._writer_thread = None

    def _writer_loop(self) -> None:
        while True:
            item = self._write_queue.get()
            if item is None:
                self._write_queue.task_done()
                break

            try:
                self._write_daily_entry(*item)
            except OSError as ex:
                _LOGGER.error("Failed to write daily log entry: %s", ex)
            finally:
                self._write_queue.task_done()

    def daily_log_file(self, dt: datetime) -> Path:
        """Return the daily structured log path for ``dt``."""
        return (
            self.log_dir
            / str(dt.year)
            / f"{dt.month:02d}"
            / f"{dt.day:02d}"
            / DAILY_LOG_FILENAME
        )

    def _write_daily_entry(
        self, event: str, level: str, data: dict[str, Any], timestamp: datetime
    ) -> None:
        log_file = self.daily_log_file(timestamp)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        entry = {
            "timestamp": timestamp.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3],
            "level": level,
            "event": event,
            "data": data,
        }
        with open(log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry, default=str) + "\n")

    def flush(self) -> None:
        """Block until every queued daily log entry has been written."""
        if self._writer_thread is not None:
            self._write_queue.join()

    # ========== Logging API ==========

    @staticmethod
    def format_message(event: str, **data: Any) -> str:
        """Render an event and its context as a single log line."""
        if not data:
            return event
        data_str = " | ".join(f"{k}={v}" for k, v in data.items())
        return f"{event} | {data_str}"

    def log(self, level: str, event: str, **data: Any) -> None:
        """Log an event at the given level.

        Args:
            level: One of error, warning, info, debug
            event: Event name (e.g., "SOC_OBSERVED", "VEHICLE_NOT_FOUND")
            **data: Additional context data
        """
        log_level = self._LEVELS.get(level, logging.DEBUG)
        if self._logger.isEnabledFor(log_level):
            self._logger.log(log_level, self.format_message(event, **data))

        if self._file_logging_enabled:
            self._write_queue.put_nowait((event, level, data, datetime.now()))

    def error(self, event: str, **data: Any) -> None:
        """Log error event."""
        self.log(self.ERROR, event, **data)

    def warning(self, event: str, **data: Any) -> None:
        """Log warning event."""
        self.log(self.WARNING, event, **data)

    def info(self, event: str, **data: Any) -> None:
        """Log info event."""
        self.log(self.INFO, event, **data)

    def debug(self, event: str, **data: Any) -> None:
        """Log debug event."""
        self.log(self.DEBUG, event, **data)

    @property
    def file_logging_enabled(self) -> bool:
        """Check if daily structured logging is enabled."""
        return self._file_logging_enabled


# Singleton instance
_logger_instance: SchedulerLogger | None = None


def get_logger() -> SchedulerLogger:
    """Get or create the shared logger instance."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = SchedulerLogger()
    return _logger_instance
