from ..outcomes import ToolOutcome
from ..prompts.grammar_checker import (
    REFUSAL_MESSAGE,
    create_grammar_check_prompt,
    parse_grammar_check_response,
)
from ..schemas import GrammarCheckFailure, GrammarCheckParams
from .base import ToolPanel


class GrammarCheckerPanel(ToolPanel):
    slug = "grammar-checker"
    title = "Check English Grammar"
    template = "panels/grammar_checker.html"
    refusal_message = REFUSAL_MESSAGE

    def build_prompt(self, text: str) -> str:
        return create_grammar_check_prompt(GrammarCheckParams(text=text))

    def parse(self, raw_text: str) -> ToolOutcome:
        parsed = parse_grammar_check_response(raw_text)
        if isinstance(parsed, GrammarCheckFailure):
            if parsed.error == REFUSAL_MESSAGE:
                return ToolOutcome.refusal(parsed.error)
            return ToolOutcome.parse_error(parsed.error)
        return ToolOutcome.success(parsed)
