"""
Steps and ordered step collections.

A flow definition owns exactly one StepCollection. Step numbers are
1-based and contiguous, so the collection is effectively a tuple indexed
by number - 1.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple, Type

from pydantic import BaseModel

from formflow.core.exceptions import (
    EmptyCollectionError,
    InvalidStepCollectionError,
    StepNotFoundError,
)


@dataclass(frozen=True)
class Step:
    """One numbered stage of a flow, optionally backed by a pydantic schema"""

    number: int
    label: str = ""
    form_schema: Optional[Type[BaseModel]] = None

    def __post_init__(self):
        if self.number < 1:
            raise InvalidStepCollectionError(
                f"Step numbers start at 1, got {self.number}",
                details={"step_number": self.number},
            )


class StepsBefore:
    """Restartable, lazy view over the steps numbered below an upper bound"""

    def __init__(self, steps: Tuple[Step, ...], upper: int):
        self._steps = steps
        self._upper = upper

    def __iter__(self) -> Iterator[Step]:
        for step in self._steps:
            if step.number >= self._upper:
                return
            yield step


class StepCollection:
    """Immutable ordered sequence of steps numbered 1..n"""

    def __init__(self, steps: Iterable[Step] = ()):
        ordered = tuple(sorted(steps, key=lambda step: step.number))
        expected = list(range(1, len(ordered) + 1))
        actual = [step.number for step in ordered]
        if actual != expected:
            raise InvalidStepCollectionError(
                f"Step numbers must be unique and contiguous from 1, got {actual}",
                details={"step_numbers": actual},
            )
        self._steps = ordered

    @classmethod
    def from_schemas(cls, *schemas: Optional[Type[BaseModel]]) -> "StepCollection":
        """Number the given form schemas 1..n in order (None for a schema-less step)"""
        return cls(
            Step(
                number=number,
                label=schema.__name__ if schema is not None else "",
                form_schema=schema,
            )
            for number, schema in enumerate(schemas, start=1)
        )

    def count(self) -> int:
        return len(self._steps)

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self._steps)

    def __contains__(self, number: object) -> bool:
        return isinstance(number, int) and 1 <= number <= len(self._steps)

    def get(self, number: int) -> Step:
        if number not in self:
            raise StepNotFoundError(number, len(self._steps))
        return self._steps[number - 1]

    def first(self) -> Step:
        if not self._steps:
            raise EmptyCollectionError("Unable to get the first step of an empty collection.")
        return self._steps[0]

    def last(self) -> Step:
        if not self._steps:
            raise EmptyCollectionError("Unable to get the last step of an empty collection.")
        return self._steps[-1]

    def steps_before(self, number: int) -> StepsBefore:
        return StepsBefore(self._steps, number)

    def __repr__(self) -> str:
        return f"StepCollection({[step.number for step in self._steps]})"
