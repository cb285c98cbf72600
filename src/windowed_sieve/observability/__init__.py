from .adapters import FanoutLogSink, JsonlLogSink, StderrLogSink
from .domain import LOG_LEVELS, LogMessage

__all__ = ["FanoutLogSink", "JsonlLogSink", "LOG_LEVELS", "LogMessage", "StderrLogSink"]
