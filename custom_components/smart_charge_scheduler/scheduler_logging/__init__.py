"""Unified logging module for Smart Charge Scheduler."""

from .unified_logger import SchedulerLogger, get_logger

__all__ = ["SchedulerLogger", "get_logger"]
