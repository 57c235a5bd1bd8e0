"""
Study-aid artifact schemas.

Declarative shapes for model-generated MCQs, flashcards and mind maps.
Every constraint failure rejects the whole artifact; nothing is repaired
or partially accepted.

Dependencies: pydantic
System role: Artifact response models and validation rules
"""

from typing import Annotated

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    RootModel,
    StrictStr,
    field_validator,
    model_validator,
)

MCQ_QUESTION_COUNT = 5
MCQ_OPTION_COUNT = 4
FLASHCARD_COUNT = 5


def _non_empty(value: str) -> str:
    if not value.strip():
        raise ValueError("must be a non-empty string")
    return value


NonEmptyStr = Annotated[StrictStr, AfterValidator(_non_empty)]


class MCQQuestion(BaseModel):
    """Single multiple-choice question."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    question: NonEmptyStr
    options: list[NonEmptyStr]
    correct_answer: NonEmptyStr = Field(alias="correctAnswer")
    explanation: NonEmptyStr

    @field_validator("options")
    @classmethod
    def _exactly_four_options(cls, value: list[str]) -> list[str]:
        if len(value) != MCQ_OPTION_COUNT:
            raise ValueError(f"expected exactly {MCQ_OPTION_COUNT} options, got {len(value)}")
        return value

    @model_validator(mode="after")
    def _answer_is_an_option(self) -> "MCQQuestion":
        if self.correct_answer not in self.options:
            raise ValueError("correctAnswer must be one of the options")
        return self


class MCQSet(BaseModel):
    """MCQ artifact: exactly five questions."""

    model_config = ConfigDict(extra="ignore")

    questions: list[MCQQuestion]

    @field_validator("questions")
    @classmethod
    def _exactly_five_questions(cls, value: list[MCQQuestion]) -> list[MCQQuestion]:
        if len(value) != MCQ_QUESTION_COUNT:
            raise ValueError(
                f"expected exactly {MCQ_QUESTION_COUNT} questions, got {len(value)}"
            )
        return value


class Flashcard(BaseModel):
    """Single flashcard."""

    model_config = ConfigDict(extra="ignore")

    front: NonEmptyStr
    back: NonEmptyStr


class FlashcardDeck(RootModel[list[Flashcard]]):
    """Flashcard artifact: a bare array of exactly five cards."""

    @model_validator(mode="after")
    def _exactly_five_cards(self) -> "FlashcardDeck":
        if len(self.root) != FLASHCARD_COUNT:
            raise ValueError(f"expected exactly {FLASHCARD_COUNT} flashcards, got {len(self.root)}")
        return self


class MindMapNode(BaseModel):
    """Mind map node with optional note, color and children."""

    model_config = ConfigDict(extra="ignore")

    id: NonEmptyStr
    text: NonEmptyStr
    note: str | None = None
    color: str | None = None
    children: list["MindMapNode"] = Field(default_factory=list)


class MindMap(BaseModel):
    """Mind map artifact."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: NonEmptyStr
    root_node: MindMapNode = Field(alias="rootNode")
