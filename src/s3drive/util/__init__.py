from .time import format_timestamp, normalize_dt, now_utc, to_rfc3339

__all__ = [
    "now_utc",
    "normalize_dt",
    "to_rfc3339",
    "format_timestamp",
]
