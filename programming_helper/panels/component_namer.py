from typing import Any, Mapping

from ..gateway import ModelGateway
from ..prompts.component_namer import REFUSAL_MESSAGE, create_component_name_prompt
from ..schemas import ComponentNameParams, Language
from .base import choice_option, int_option
from .chat import ConversationPanel

SUGGESTION_COUNTS = list(range(1, 11))


class ComponentNamerPanel(ConversationPanel):
    slug = "component-namer"
    title = "React Named Component from Content"
    template = "panels/component_namer.html"
    refusal_message = REFUSAL_MESSAGE
    empty_message = "Sorry, I couldn't generate names based on that description."
    error_prefix = "An error occurred while contacting the AI: "
    unavailable_warning = (
        "Warning: Gemini API Key not configured or failed to initialize. "
        "Please check environment variables and server logs."
    )

    def __init__(self, gateway: ModelGateway) -> None:
        super().__init__(gateway)
        self.language = Language.ENGLISH
        self.count = 3

    def apply_form(self, form: Mapping[str, Any]) -> None:
        super().apply_form(form)
        self.language = choice_option(form, "language", self.language)
        self.count = int_option(form, "count", self.count, low=1, high=10)

    def build_prompt(self, text: str) -> str:
        return create_component_name_prompt(
            ComponentNameParams(description=text, language=self.language, count=self.count)
        )

    def context(self) -> dict:
        return {
            "panel": self,
            "languages": list(Language),
            "counts": SUGGESTION_COUNTS,
        }
