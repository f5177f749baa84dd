"""
In-process notification bus.

Channels are keyed by (event kind, flow name, step number). A publish
fans out to the step channel, then the flow channel, then the global
channel, synchronously on the caller's thread. Listener exceptions are
not caught.
"""

from dataclasses import dataclass
from itertools import count
from typing import Callable, Dict, List, Optional, Tuple

import structlog

from formflow.core.exceptions import ConfigurationError
from formflow.events.events import Event, FormFlowEvents

logger = structlog.get_logger(__name__)

Listener = Callable[[Event], None]


@dataclass(frozen=True)
class Channel:
    kind: FormFlowEvents
    flow_name: Optional[str] = None
    step_number: Optional[int] = None

    def __post_init__(self):
        if self.step_number is not None and self.flow_name is None:
            raise ConfigurationError(
                "A step scoped channel needs a flow name",
                details={"kind": self.kind.value, "step_number": self.step_number},
            )

    @property
    def name(self) -> str:
        """String identifier, e.g. pre_forwards.checkout.step_1"""
        parts = [self.kind.value]
        if self.flow_name is not None:
            parts.append(self.flow_name)
        if self.step_number is not None:
            parts.append(f"step_{self.step_number}")
        return ".".join(parts)

    def __str__(self) -> str:
        return self.name


class NotificationBus:
    def __init__(self):
        # channel -> [(-priority, registration order, listener)]
        self._listeners: Dict[Channel, List[Tuple[int, int, Listener]]] = {}
        self._order = count()

    def subscribe(
        self,
        kind: FormFlowEvents,
        listener: Listener,
        flow_name: Optional[str] = None,
        step_number: Optional[int] = None,
        priority: int = 0,
    ) -> Channel:
        """
        Register a listener on one channel.

        Higher priority runs first; equal priorities run in registration order.
        """
        channel = Channel(FormFlowEvents(kind), flow_name, step_number)
        entries = self._listeners.setdefault(channel, [])
        entries.append((-priority, next(self._order), listener))
        entries.sort(key=lambda entry: entry[:2])
        return channel

    def unsubscribe(
        self,
        kind: FormFlowEvents,
        listener: Listener,
        flow_name: Optional[str] = None,
        step_number: Optional[int] = None,
    ) -> bool:
        channel = Channel(FormFlowEvents(kind), flow_name, step_number)
        entries = self._listeners.get(channel, [])
        remaining = [entry for entry in entries if entry[2] != listener]
        if len(remaining) == len(entries):
            return False
        if remaining:
            self._listeners[channel] = remaining
        else:
            del self._listeners[channel]
        return True

    def listeners(self, channel: Channel) -> List[Listener]:
        return [entry[2] for entry in self._listeners.get(channel, [])]

    def has_listeners(self, channel: Channel) -> bool:
        return bool(self._listeners.get(channel))

    @staticmethod
    def channels_for(
        kind: FormFlowEvents, flow_name: str, step_number: Optional[int] = None
    ) -> List[Channel]:
        """Channels of one publish in dispatch order (step, flow, global)"""
        channels = []
        if step_number is not None:
            channels.append(Channel(kind, flow_name, step_number))
        channels.append(Channel(kind, flow_name))
        channels.append(Channel(kind))
        return channels

    def publish(
        self,
        event: Event,
        kind: FormFlowEvents,
        flow_name: str,
        step_number: Optional[int] = None,
    ) -> Event:
        for channel in self.channels_for(kind, flow_name, step_number):
            listeners = self.listeners(channel)
            if listeners:
                logger.debug(
                    "flow_notification_dispatched",
                    channel=channel.name,
                    listener_count=len(listeners),
                )
            for listener in listeners:
                listener(event)
        return event
