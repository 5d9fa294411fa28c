from __future__ import annotations

from typing import List

from ..gateway import ModelGateway
from ..outcomes import ToolOutcome
from ..schemas import ConversationEntry, PanelStatus, Sender
from .base import ToolPanel


class ConversationPanel(ToolPanel):
    """
    Panel that keeps every turn instead of a single result slot.

    The log lives as long as the mounted panel; switching tabs discards it.
    """

    def __init__(self, gateway: ModelGateway) -> None:
        super().__init__(gateway)
        self.messages: List[ConversationEntry] = []

    def begin(self, text: str) -> None:
        super().begin(text)
        self.messages.append(ConversationEntry(sender=Sender.USER, text=text))
        self.input_text = ""

    def apply(self, outcome: ToolOutcome) -> None:
        if outcome.ok:
            self.status = PanelStatus.SUCCESS
            reply = str(outcome.value)
        else:
            self.status = PanelStatus.FAILED
            reply = self.display_message(outcome)
        self.messages.append(ConversationEntry(sender=Sender.AI, text=reply))
