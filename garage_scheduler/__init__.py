"""Garage ticket scheduler: per-day capacity, ticket queues, intake and worker action log."""

__version__ = "0.1.0"
