"""Parsing of the transition key value into a TransitionRequest"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

from formflow.core.config import FormFlowSettings, settings as default_settings


class TransitionKind(str, Enum):
    FORWARDS = "forwards"
    BACKWARDS = "backwards"
    COMPLETE = "complete"
    RESET = "reset"
    UNKNOWN = "unknown"


def read_transition_value(request: Mapping[str, Any], key: str) -> str:
    value = request.get(key)
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class TransitionRequest:
    kind: TransitionKind
    raw_value: str
    requested_step_number: Optional[int] = None

    @classmethod
    def parse(
        cls, raw_value: str, settings: Optional[FormFlowSettings] = None
    ) -> "TransitionRequest":
        """
        Classify a raw transition key value.

        "0:<N>" is BACKWARDS to step N; a malformed target leaves
        requested_step_number as None so the transitioner can reject it.
        """
        settings = settings or default_settings
        value = raw_value.strip()

        if value == settings.forwards_marker:
            return cls(TransitionKind.FORWARDS, raw_value)
        if value == settings.complete_marker:
            return cls(TransitionKind.COMPLETE, raw_value)
        if value == settings.reset_marker:
            return cls(TransitionKind.RESET, raw_value)

        prefix = settings.backwards_marker + settings.step_separator
        if value == settings.backwards_marker or value.startswith(prefix):
            target = value[len(prefix):]
            try:
                requested = int(target)
            except ValueError:
                requested = None
            return cls(TransitionKind.BACKWARDS, raw_value, requested)

        return cls(TransitionKind.UNKNOWN, raw_value)

    @classmethod
    def from_request(
        cls,
        request: Mapping[str, Any],
        transition_key: str,
        settings: Optional[FormFlowSettings] = None,
    ) -> "TransitionRequest":
        return cls.parse(read_transition_value(request, transition_key), settings)
