"""Arrivals pool feeding the intake gate."""

from .waiting_list import WaitingCar, WaitingList

__all__ = ["WaitingCar", "WaitingList"]
