from typing import Any, Mapping

from ..gateway import ModelGateway
from ..prompts.sentence_rewriter import REFUSAL_MESSAGE, create_rewrite_sentence_prompt
from ..schemas import RewriteGoal, RewriteSentenceParams
from .base import choice_option, int_option
from .chat import ConversationPanel


class SentenceRewriterPanel(ConversationPanel):
    slug = "sentence-rewriter"
    title = "Rewrite Sentence Better"
    template = "panels/sentence_rewriter.html"
    refusal_message = REFUSAL_MESSAGE
    empty_message = "Sorry, I couldn't rewrite the sentence."
    error_prefix = "An error occurred: "
    unavailable_warning = "Warning: Gemini API not available. Check API Key and server logs."

    def __init__(self, gateway: ModelGateway) -> None:
        super().__init__(gateway)
        self.goal = RewriteGoal.AUTO
        self.count = 1

    def apply_form(self, form: Mapping[str, Any]) -> None:
        super().apply_form(form)
        self.goal = choice_option(form, "goal", self.goal)
        self.count = int_option(form, "count", self.count, low=1, high=3)

    def build_prompt(self, text: str) -> str:
        return create_rewrite_sentence_prompt(
            RewriteSentenceParams(sentence=text, goal=self.goal, count=self.count)
        )

    def context(self) -> dict:
        return {"panel": self, "goals": list(RewriteGoal), "counts": [1, 2, 3]}
