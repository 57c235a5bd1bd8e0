"""
Response validator.

Validates model output against the artifact schemas and returns a tagged
result instead of raising: `Ok(artifact)` or `Err(failure)`. Failure
messages name the offending element and the constraint it broke, e.g.
`questions[2].options: expected exactly 4 options, got 3`.

Dependencies: pydantic, json
System role: Structural gate between generation and the caller
"""

import json
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, Union

from pydantic import BaseModel, ValidationError

from notchy.core.exceptions import ArtifactValidationError
from notchy.models.artifacts import FlashcardDeck, MCQSet, MindMap

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class ValidationFailure:
    """Why an artifact was rejected."""

    artifact: str
    errors: list[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        return "; ".join(self.errors)


@dataclass(frozen=True)
class Ok(Generic[ModelT]):
    value: ModelT


@dataclass(frozen=True)
class Err:
    failure: ValidationFailure


ValidationResult = Union[Ok[ModelT], Err]


def format_location(loc: tuple[Any, ...], root_name: str) -> str:
    """Render a pydantic error location as `questions[2].options`."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    if not path or path.startswith("["):
        path = root_name + path
    return path


def format_error(error: dict[str, Any], root_name: str) -> str:
    ctx = error.get("ctx") or {}
    if error.get("type") == "value_error" and "error" in ctx:
        reason = str(ctx["error"])
    else:
        reason = error.get("msg", "invalid value")
    return f"{format_location(tuple(error.get('loc', ())), root_name)}: {reason}"


class ResponseValidator(Generic[ModelT]):
    """Schema-driven validator shared by every artifact type."""

    def __init__(
        self,
        schema: type[ModelT],
        artifact: str,
        root_name: str = "response",
        unwrap_key: str | None = None,
    ) -> None:
        """
        Args:
            schema: Pydantic model describing the artifact
            artifact: Plural artifact name used in error labels ("MCQs")
            root_name: Name used for errors at the top level
            unwrap_key: Key whose array is taken as the artifact when the
                payload is an object holding exactly one array
        """
        self.schema = schema
        self.artifact = artifact
        self.root_name = root_name
        self.unwrap_key = unwrap_key

    def _unwrap(self, payload: Any) -> Any:
        if self.unwrap_key is None or not isinstance(payload, dict):
            return payload
        arrays = [value for value in payload.values() if isinstance(value, list)]
        if len(arrays) == 1 and isinstance(payload.get(self.unwrap_key), list):
            return payload[self.unwrap_key]
        return payload

    def validate(self, payload: Any) -> ValidationResult:
        """
        Validate raw JSON text or an already-parsed value.

        Args:
            payload: Model output

        Returns:
            Ok with the artifact, or Err describing every violation found
        """
        if isinstance(payload, (str, bytes)):
            try:
                payload = json.loads(payload)
            except json.JSONDecodeError as e:
                return Err(ValidationFailure(self.artifact, [f"{self.root_name}: invalid JSON ({e.msg})"]))

        try:
            artifact = self.schema.model_validate(self._unwrap(payload))
        except ValidationError as e:
            errors = [format_error(error, self.root_name) for error in e.errors()]
            return Err(ValidationFailure(self.artifact, errors))
        return Ok(artifact)

    def validate_or_raise(self, payload: Any) -> ModelT:
        """Validate and return the artifact, or raise ArtifactValidationError."""
        result = self.validate(payload)
        if isinstance(result, Err):
            raise ArtifactValidationError(
                self.artifact,
                result.failure.message,
                {"errors": result.failure.errors},
            )
        return result.value


MCQ_VALIDATOR: ResponseValidator[MCQSet] = ResponseValidator(MCQSet, "MCQs")
FLASHCARD_VALIDATOR: ResponseValidator[FlashcardDeck] = ResponseValidator(
    FlashcardDeck, "flashcards", root_name="flashcards", unwrap_key="flashcards"
)
MINDMAP_VALIDATOR: ResponseValidator[MindMap] = ResponseValidator(MindMap, "mind map")
