from .base import StepForm
from .pydantic_form import EmptyStepSchema, PydanticStepForm

__all__ = ["StepForm", "PydanticStepForm", "EmptyStepSchema"]
