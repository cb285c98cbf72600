from .logging import FanoutLogSink, JsonlLogSink, StderrLogSink

__all__ = ["FanoutLogSink", "JsonlLogSink", "StderrLogSink"]
