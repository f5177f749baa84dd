from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Status:
    """
    Outcome of one transition attempt.

    form_valid is None when the step input was never evaluated
    (reset, unknown request, incomplete prior steps).
    """

    successful: bool
    form_valid: Optional[bool] = None
    blocked: bool = False
    completed: bool = False
    reset: bool = False

    @classmethod
    def success(cls, **flags) -> "Status":
        return cls(successful=True, **flags)

    @classmethod
    def failure(cls, **flags) -> "Status":
        return cls(successful=False, **flags)

    def is_successful(self) -> bool:
        return self.successful

    def is_failure(self) -> bool:
        return not self.successful

    def is_blocked(self) -> bool:
        return self.blocked

    def is_completed(self) -> bool:
        return self.completed

    def is_reset(self) -> bool:
        return self.reset

    def has_valid_form(self) -> bool:
        return self.form_valid is True

    def has_invalid_form(self) -> bool:
        return self.form_valid is False

    def flags(self) -> Tuple[str, ...]:
        names = ["SUCCESS" if self.successful else "FAILURE"]
        if self.form_valid is not None:
            names.append("VALID_FORM" if self.form_valid else "INVALID_FORM")
        if self.blocked:
            names.append("BLOCKED")
        if self.completed:
            names.append("COMPLETED")
        if self.reset:
            names.append("RESET")
        return tuple(names)

    def __str__(self) -> str:
        return "|".join(self.flags())
