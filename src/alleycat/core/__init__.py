"""Core framework components for ALLEYCAT."""

from .state import Phase, PhaseMachine
from .events import EventBus, Event, EventType
from .clock import FrameDriver

__all__ = ["Phase", "PhaseMachine", "EventBus", "Event", "EventType", "FrameDriver"]
