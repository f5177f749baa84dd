"""
Flow registry for lookup by name.

Provides factory to create flow instances by flow name.
"""

from typing import Dict, List, Optional

from formflow.core.config import FormFlowSettings
from formflow.core.exceptions import ConfigurationError, FlowNotFoundError
from formflow.infrastructure.storage import FlowStorage
from formflow.transitions.transitioner import Transitioner
from .definition import FlowDefinition
from .flow import Flow


class FlowRegistry:
    def __init__(self):
        self._definitions: Dict[str, FlowDefinition] = {}

    def register(self, definition: FlowDefinition) -> FlowDefinition:
        if definition.name in self._definitions:
            raise ConfigurationError(
                f'Flow "{definition.name}" is already registered.',
                details={"flow": definition.name},
            )
        self._definitions[definition.name] = definition
        return definition

    def get(self, name: str) -> FlowDefinition:
        """
        Raises:
            FlowNotFoundError: If no flow is registered under name
        """
        if name not in self._definitions:
            raise FlowNotFoundError(
                f"Unknown flow: {name}. Available: {self.names()}",
                details={"flow": name},
            )
        return self._definitions[name]

    def names(self) -> List[str]:
        return list(self._definitions.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def create_flow(
        self,
        name: str,
        storage: FlowStorage,
        instance_id: str,
        transitioner: Optional[Transitioner] = None,
        settings: Optional[FormFlowSettings] = None,
    ) -> Flow:
        """
        Factory to instantiate a flow by name.

        Args:
            name: Registered flow name
            storage: Context storage
            instance_id: Session / instance identifier
            transitioner: Shared engine (carries the notification bus)
            settings: Naming and marker configuration

        Raises:
            FlowNotFoundError: If name is not registered
        """
        return Flow(
            self.get(name),
            storage,
            instance_id,
            transitioner=transitioner,
            settings=settings,
        )


flow_registry = FlowRegistry()
