from __future__ import annotations

import logging
from typing import Any, ClassVar, Mapping, Optional

from ..errors import TransportOrModelError
from ..gateway import ModelGateway
from ..outcomes import OutcomeKind, ToolOutcome
from ..schemas import PanelStatus

logger = logging.getLogger(__name__)

UNAVAILABLE_WARNING = "Warning: Gemini API not available. Check API Key."


def int_option(
    form: Mapping[str, Any],
    key: str,
    current: int,
    *,
    low: Optional[int] = None,
    high: Optional[int] = None,
) -> int:
    """Read an integer form option, keeping `current` when the field is absent or blank."""
    raw = form.get(key)
    if raw is None or str(raw).strip() == "":
        return current
    try:
        value = int(str(raw).strip())
    except ValueError:
        raise ValueError(f"{key} must be a whole number, got {raw!r}") from None
    if (low is not None and value < low) or (high is not None and value > high):
        if high is None:
            expected = f"at least {low}"
        elif low is None:
            expected = f"at most {high}"
        else:
            expected = f"{low}..{high}"
        raise ValueError(f"{key} must be {expected}, got {value}")
    return value


def choice_option(form: Mapping[str, Any], key: str, current: Any) -> Any:
    """Read an enum-valued form option; unknown values raise ValueError."""
    raw = form.get(key)
    if raw is None or str(raw).strip() == "":
        return current
    return type(current)(str(raw))


class ToolPanel:
    """
    Request/response state machine shared by every tool.

    Idle -> Submitting -> Success | Failed. A panel is loading, holding a
    result, or holding an error message; never more than one at a time.
    Subclasses provide the prompt builder, the refusal sentinel and the
    user-facing messages, and may override `parse` and `apply`.
    """

    slug: ClassVar[str]
    title: ClassVar[str]
    template: ClassVar[str]
    refusal_message: ClassVar[str]
    empty_message: ClassVar[str] = "The AI returned an empty response."
    error_prefix: ClassVar[str] = "API Error: "
    unavailable_warning: ClassVar[str] = UNAVAILABLE_WARNING

    def __init__(self, gateway: ModelGateway) -> None:
        self.gateway = gateway
        self.input_text = ""
        self.status = PanelStatus.IDLE
        self.result: Any = None
        self.error_message: Optional[str] = None

    @property
    def is_loading(self) -> bool:
        return self.status == PanelStatus.SUBMITTING

    @property
    def available(self) -> bool:
        return self.gateway.is_available()

    @property
    def disabled(self) -> bool:
        return self.is_loading or not self.available

    def can_submit(self) -> bool:
        return bool(self.input_text.strip()) and not self.is_loading and self.available

    def apply_form(self, form: Mapping[str, Any]) -> None:
        """Copy submitted form values into the panel. Raises ValueError on bad options."""
        if "text" in form:
            self.input_text = str(form["text"] or "")

    def build_prompt(self, text: str) -> str:
        raise NotImplementedError

    def parse(self, raw_text: str) -> ToolOutcome:
        return ToolOutcome.success(raw_text)

    async def submit(self) -> Optional[ToolOutcome]:
        """
        Run one request. Returns None without contacting the model when the
        input is blank, a request is already in flight, or the model is
        unavailable.
        """
        if not self.can_submit():
            return None

        text = self.input_text.strip()
        self.begin(text)
        outcome: Optional[ToolOutcome] = None
        try:
            outcome = await self._run(text)
        finally:
            if outcome is None:
                # Unexpected exception; leave the panel usable.
                self.status = PanelStatus.IDLE
        self.apply(outcome)
        return outcome

    def begin(self, text: str) -> None:
        self.status = PanelStatus.SUBMITTING
        self.result = None
        self.error_message = None

    async def _run(self, text: str) -> ToolOutcome:
        prompt = self.build_prompt(text)
        try:
            raw_text = await self.gateway.generate(prompt)
        except TransportOrModelError as exc:
            logger.error("Error calling the model from %s panel: %s", self.slug, exc)
            return ToolOutcome.transport_error(str(exc))
        return self.interpret(raw_text.strip())

    def interpret(self, raw_text: str) -> ToolOutcome:
        if raw_text == self.refusal_message:
            logger.warning("Model refused the %s request as instructed by the prompt.", self.slug)
            return ToolOutcome.refusal(raw_text)
        if not raw_text:
            return ToolOutcome.empty(self.empty_message)
        return self.parse(raw_text)

    def display_message(self, outcome: ToolOutcome) -> str:
        if outcome.kind == OutcomeKind.TRANSPORT_ERROR:
            return f"{self.error_prefix}{outcome.message}"
        return outcome.message or ""

    def apply(self, outcome: ToolOutcome) -> None:
        if outcome.ok:
            self.status = PanelStatus.SUCCESS
            self.result = outcome.value
        else:
            self.status = PanelStatus.FAILED
            self.error_message = self.display_message(outcome)

    def context(self) -> dict:
        """Template variables for this panel."""
        return {"panel": self}
