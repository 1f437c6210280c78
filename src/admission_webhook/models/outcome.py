"""
Tagged validation outcomes.

A validator either returns warnings or raises. The handler folds that result
into exactly one of three variants so the translation into a response is
exhaustive:

- Admitted: no error, warnings (possibly empty) pass through unchanged
- StructuredFailure: a StatusError was raised, its status is used verbatim
  and any warnings are dropped
- PlainFailure: any other exception, normalized to 403 Forbidden with the
  exception text; warnings attached to a ValidationFailure are kept
"""

from collections.abc import Iterable
from typing import Annotated, Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field

from admission_webhook.errors import StatusError, ValidationFailure
from admission_webhook.models.admission import Status


class Admitted(BaseModel):
    model_config = ConfigDict(frozen=True)

    outcome: Literal["admitted"] = "admitted"
    warnings: tuple[str, ...] = ()


class StructuredFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    outcome: Literal["structured_failure"] = "structured_failure"
    status: Status


class PlainFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    outcome: Literal["plain_failure"] = "plain_failure"
    message: str
    warnings: tuple[str, ...] = ()


ValidationOutcome: TypeAlias = Annotated[
    Admitted | StructuredFailure | PlainFailure, Field(discriminator="outcome")
]


def classify_outcome(
    warnings: Iterable[str] | None, error: Exception | None
) -> ValidationOutcome:
    """
    Fold a validator's return value and raised exception into one outcome.

    Args:
        warnings: Warnings returned by the validator hook, if it returned
        error: Exception raised by the validator hook, if any

    Returns:
        The matching outcome variant

    Raises:
        TypeError: If the warnings are not an iterable of strings
        pydantic.ValidationError: If a warning is not a string
    """
    if isinstance(warnings, str | bytes):
        raise TypeError(
            f"warnings must be a list of strings, not {type(warnings).__name__}"
        )

    if error is None:
        return Admitted(warnings=tuple(warnings or ()))

    if isinstance(error, StatusError):
        return StructuredFailure(status=error.status)

    carried: Iterable[str] = warnings or ()
    if isinstance(error, ValidationFailure):
        carried = error.warnings
    # A denial always carries a message, even for exceptions without text
    message = str(error) or type(error).__name__
    return PlainFailure(message=message, warnings=tuple(carried))
