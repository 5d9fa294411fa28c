from enum import Enum
from typing import Any, List, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Language(str, Enum):
    ENGLISH = "English"
    VIETNAMESE = "Vietnamese"


class RewriteGoal(str, Enum):
    AUTO = "Auto (General Improvement)"
    CLARITY = "Improve Clarity"
    CONCISE = "Make More Concise"
    FORMAL = "Make More Formal"
    CASUAL = "Make More Casual"
    FLOW = "Improve Flow & Readability"
    VOCABULARY = "Enhance Vocabulary"


class PresetLength(str, Enum):
    SHORT = "Short"
    MEDIUM = "Medium"
    LONG = "Long"


class SummaryFormat(str, Enum):
    PARAGRAPH = "Paragraph"
    BULLET_POINTS = "Bullet Points"


class LengthControlType(str, Enum):
    PRESET = "Preset"
    PERCENTAGE = "Percentage"
    WORD_COUNT = "WordCount"


PERCENTAGE_RANGE = (10, 80)
MIN_WORD_COUNT = 20


def _require_text(value: str) -> str:
    if not value or not value.strip():
        raise ValueError("text must not be empty")
    return value


class ComponentNameParams(BaseModel):
    description: str = Field(..., description="What the component does or looks like")
    language: Language = Field(default=Language.ENGLISH)
    count: int = Field(default=3, ge=1, le=10, description="Number of names to suggest")

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, value: str) -> str:
        return _require_text(value)


class RewriteSentenceParams(BaseModel):
    sentence: str = Field(..., description="Sentence or short text to rewrite")
    goal: RewriteGoal = Field(default=RewriteGoal.AUTO)
    count: int = Field(default=1, ge=1, le=3, description="Number of rewritten suggestions")

    @field_validator("sentence")
    @classmethod
    def sentence_not_blank(cls, value: str) -> str:
        return _require_text(value)


class ImagePromptParams(BaseModel):
    description: str = Field(..., description="Basic description of the desired image")
    count: int = Field(default=1, ge=1, le=3, description="Number of prompt variations")

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, value: str) -> str:
        return _require_text(value)


class GrammarCheckParams(BaseModel):
    text: str = Field(..., description="English text to check")

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, value: str) -> str:
        return _require_text(value)


class LengthOption(BaseModel):
    """
    Summary length request.

    `value` is a PresetLength when `type` is Preset, otherwise an integer:
    a percentage in 10..80 or an approximate word count of at least 20.
    """

    type: LengthControlType = Field(default=LengthControlType.PRESET)
    value: Union[PresetLength, int] = Field(default=PresetLength.MEDIUM)

    @model_validator(mode="after")
    def check_value(self) -> "LengthOption":
        if self.type == LengthControlType.PRESET:
            if not isinstance(self.value, PresetLength):
                self.value = PresetLength(self.value)
            return self
        if isinstance(self.value, PresetLength):
            raise ValueError(f"{self.type.value} length needs a number, got {self.value.value!r}")
        if self.type == LengthControlType.PERCENTAGE:
            low, high = PERCENTAGE_RANGE
            if not low <= self.value <= high:
                raise ValueError(f"percentage must be between {low} and {high}")
        elif self.value < MIN_WORD_COUNT:
            raise ValueError(f"word count must be at least {MIN_WORD_COUNT}")
        return self

    @property
    def display_value(self) -> str:
        if isinstance(self.value, PresetLength):
            return self.value.value
        return str(self.value)


class SummarizeParams(BaseModel):
    text: str = Field(..., description="Text to summarize; newlines are preserved")
    length_option: LengthOption = Field(default_factory=LengthOption)
    format: SummaryFormat = Field(default=SummaryFormat.PARAGRAPH)

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, value: str) -> str:
        return _require_text(value)


class GrammarIssue(BaseModel):
    """
    One error reported by the grammar checker.

    Field types are loose: the model occasionally returns
    numbers or nulls here and the result is still shown.
    """

    model_config = ConfigDict(populate_by_name=True)

    original_phrase: Any = Field(default=None, alias="originalPhrase")
    suggestion: Any = Field(default=None)
    explanation: Any = Field(default=None)


class GrammarCheckResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    corrected_text: str = Field(..., alias="correctedText")
    errors: List[GrammarIssue] = Field(default_factory=list)


class GrammarCheckFailure(BaseModel):
    error: str


class Sender(str, Enum):
    USER = "user"
    AI = "ai"


class ConversationEntry(BaseModel):
    sender: Sender
    text: str


class PanelStatus(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"
