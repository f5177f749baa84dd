from .bus import Channel, Listener, NotificationBus
from .events import (
    CompletedEvent,
    Event,
    FormFlowEvents,
    ResetEvent,
    TransitionedEvent,
    TransitionEvent,
)

__all__ = [
    "Channel",
    "Listener",
    "NotificationBus",
    "Event",
    "FormFlowEvents",
    "TransitionEvent",
    "TransitionedEvent",
    "CompletedEvent",
    "ResetEvent",
]
