from .common import local_asctime, utc_timestamp

__all__ = ["local_asctime", "utc_timestamp"]
