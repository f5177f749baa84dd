from .definition import FlowDefinition
from .flow import Flow
from .registry import FlowRegistry, flow_registry

__all__ = ["Flow", "FlowDefinition", "FlowRegistry", "flow_registry"]
