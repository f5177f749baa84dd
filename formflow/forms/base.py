from abc import ABC, abstractmethod
from typing import Any, Mapping


class StepForm(ABC):
    """Input binding for one step, as consumed by the transitioner"""

    @abstractmethod
    def is_submitted(self) -> bool:
        ...

    @abstractmethod
    def is_valid(self) -> bool:
        ...

    @abstractmethod
    def handle_request(self, request: Mapping[str, Any]) -> None:
        ...
