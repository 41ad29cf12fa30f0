"""State management helpers for Holmes appliances."""

from .device_state import ChannelState, StateListener

__all__ = ["ChannelState", "StateListener"]
