"""
Step forms backed by pydantic models.

Fields of a step are submitted as a mapping under the form name, e.g.
{"checkout_step_1": {"email": "a@b.c"}}. A valid submission is merged
into the flow data mapping the form was bound to.
"""

from typing import Any, Dict, List, Mapping, Optional, Type

import structlog
from pydantic import BaseModel, ConfigDict, ValidationError

from .base import StepForm

logger = structlog.get_logger(__name__)


class EmptyStepSchema(BaseModel):
    """Schema for steps without input fields (e.g. a confirmation step)"""

    model_config = ConfigDict(extra="ignore")


class PydanticStepForm(StepForm):
    def __init__(
        self,
        name: str,
        data: Dict[str, Any],
        schema: Optional[Type[BaseModel]] = None,
    ):
        """
        Args:
            name: Request key holding this step's fields
            data: Flow data mapping, updated in place on valid submission
            schema: pydantic model validating the fields
        """
        self.name = name
        self.data = data
        self.schema = schema or EmptyStepSchema
        self.cleaned: Optional[BaseModel] = None
        self.errors: List[Dict[str, Any]] = []
        self._submitted = False

    def is_submitted(self) -> bool:
        return self._submitted

    def is_valid(self) -> bool:
        return self._submitted and not self.errors

    def handle_request(self, request: Mapping[str, Any]) -> None:
        payload = request.get(self.name)
        if not isinstance(payload, Mapping):
            return

        self._submitted = True
        try:
            self.cleaned = self.schema.model_validate(dict(payload))
        except ValidationError as e:
            self.cleaned = None
            self.errors = e.errors(include_url=False)
            logger.debug(
                "flow_form_validation_failed",
                form=self.name,
                error_count=len(self.errors),
            )
            return

        self.errors = []
        # flow data holds json-compatible values only
        self.data.update(self.cleaned.model_dump(mode="json"))
