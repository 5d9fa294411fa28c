from typing import Any, Mapping

from ..gateway import ModelGateway
from ..outcomes import ToolOutcome
from ..prompts.image_prompt import (
    REFUSAL_MESSAGE,
    create_image_prompt_generator_prompt,
    split_prompt_variations,
)
from ..schemas import ImagePromptParams
from .base import ToolPanel, int_option

# Fragments this short are separators or stray labels, not usable prompts.
MIN_DISPLAY_LENGTH = 10


class ImagePromptPanel(ToolPanel):
    slug = "image-prompt"
    title = "Create Img Prompt"
    template = "panels/image_prompt.html"
    refusal_message = REFUSAL_MESSAGE

    def __init__(self, gateway: ModelGateway) -> None:
        super().__init__(gateway)
        self.count = 1

    def apply_form(self, form: Mapping[str, Any]) -> None:
        super().apply_form(form)
        self.count = int_option(form, "count", self.count, low=1, high=3)

    def build_prompt(self, text: str) -> str:
        return create_image_prompt_generator_prompt(
            ImagePromptParams(description=text, count=self.count)
        )

    def parse(self, raw_text: str) -> ToolOutcome:
        return ToolOutcome.success(split_prompt_variations(raw_text))

    @property
    def visible_prompts(self) -> list[str]:
        if not self.result:
            return []
        return [prompt for prompt in self.result if len(prompt) > MIN_DISPLAY_LENGTH]

    def context(self) -> dict:
        return {"panel": self, "counts": [1, 2, 3]}
