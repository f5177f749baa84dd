"""Flow context storage contract and an in-process implementation"""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple

import structlog

from formflow.domain.context import FlowContext

logger = structlog.get_logger(__name__)


class FlowStorage(ABC):
    @abstractmethod
    def load(self, flow_name: str, instance_id: str) -> Optional[FlowContext]:
        ...

    @abstractmethod
    def save(self, context: FlowContext) -> None:
        ...

    @abstractmethod
    def delete(self, flow_name: str, instance_id: str) -> bool:
        ...


class MemoryFlowStorage(FlowStorage):
    """
    Keeps serialized contexts in a dict, like a server-side session would.

    Contexts are stored as JSON so a loaded context never aliases the
    instance that was saved.
    """

    def __init__(self):
        self._contexts: Dict[Tuple[str, str], str] = {}

    def load(self, flow_name: str, instance_id: str) -> Optional[FlowContext]:
        raw = self._contexts.get((flow_name, instance_id))
        if raw is None:
            return None
        return FlowContext.model_validate_json(raw)

    def save(self, context: FlowContext) -> None:
        self._contexts[(context.flow_name, context.instance_id)] = context.model_dump_json()
        logger.debug(
            "flow_context_saved",
            flow=context.flow_name,
            instance_id=context.instance_id,
            current_step=context.current_step_number,
        )

    def delete(self, flow_name: str, instance_id: str) -> bool:
        return self._contexts.pop((flow_name, instance_id), None) is not None

    def __len__(self) -> int:
        return len(self._contexts)
