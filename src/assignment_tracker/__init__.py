"""Personal assignment tracker: task lifecycle, time-on-task and deadline buckets."""

__version__ = "0.3.0"
