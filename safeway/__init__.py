"""SafeWay: safe walking routes, community danger reports and SOS alerts."""

__version__ = "1.0.0"
