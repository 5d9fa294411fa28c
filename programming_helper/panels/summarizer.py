from typing import Any, Mapping

from ..gateway import ModelGateway
from ..prompts.summarizer import REFUSAL_MESSAGE, create_summarize_prompt, word_count
from ..schemas import (
    MIN_WORD_COUNT,
    PERCENTAGE_RANGE,
    LengthControlType,
    LengthOption,
    PresetLength,
    SummarizeParams,
    SummaryFormat,
)
from .base import ToolPanel, choice_option, int_option


def _word_count_option(form: Mapping[str, Any], current: int) -> int:
    """Word counts are never rejected: anything below the minimum, or not a number, becomes the minimum."""
    raw = form.get("word_count_length")
    if raw is None or str(raw).strip() == "":
        return current
    try:
        requested = int(str(raw).strip())
    except ValueError:
        requested = MIN_WORD_COUNT
    return max(MIN_WORD_COUNT, requested)


class SummarizerPanel(ToolPanel):
    slug = "summarizer"
    title = "Summary Content"
    template = "panels/summarizer.html"
    refusal_message = REFUSAL_MESSAGE
    empty_message = "The AI returned an empty summary."

    def __init__(self, gateway: ModelGateway) -> None:
        super().__init__(gateway)
        self.length_control_type = LengthControlType.PRESET
        self.preset_length = PresetLength.MEDIUM
        self.percentage_length = 30
        self.word_count_length = 100
        self.summary_format = SummaryFormat.PARAGRAPH

    def apply_form(self, form: Mapping[str, Any]) -> None:
        super().apply_form(form)
        self.length_control_type = choice_option(form, "length_control_type", self.length_control_type)
        self.preset_length = choice_option(form, "preset_length", self.preset_length)
        low, high = PERCENTAGE_RANGE
        self.percentage_length = int_option(
            form, "percentage_length", self.percentage_length, low=low, high=high
        )
        self.word_count_length = _word_count_option(form, self.word_count_length)
        self.summary_format = choice_option(form, "summary_format", self.summary_format)

    def length_option(self) -> LengthOption:
        if self.length_control_type == LengthControlType.PRESET:
            return LengthOption(type=LengthControlType.PRESET, value=self.preset_length)
        if self.length_control_type == LengthControlType.PERCENTAGE:
            return LengthOption(type=LengthControlType.PERCENTAGE, value=self.percentage_length)
        return LengthOption(type=LengthControlType.WORD_COUNT, value=self.word_count_length)

    def build_prompt(self, text: str) -> str:
        return create_summarize_prompt(
            SummarizeParams(text=text, length_option=self.length_option(), format=self.summary_format)
        )

    def context(self) -> dict:
        return {
            "panel": self,
            "length_types": list(LengthControlType),
            "preset_lengths": list(PresetLength),
            "formats": list(SummaryFormat),
            "original_words": word_count(self.input_text),
            "summary_words": word_count(self.result) if self.result else 0,
        }
