from .requests import TransitionKind, TransitionRequest
from .status import Status
from .transitioner import Transitioner

__all__ = ["Status", "TransitionKind", "TransitionRequest", "Transitioner"]
