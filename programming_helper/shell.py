from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, List, Optional, Type
from uuid import uuid4

from .gateway import ModelGateway
from .panels.base import ToolPanel
from .panels.component_namer import ComponentNamerPanel
from .panels.grammar_checker import GrammarCheckerPanel
from .panels.image_prompt import ImagePromptPanel
from .panels.sentence_rewriter import SentenceRewriterPanel
from .panels.summarizer import SummarizerPanel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Tab:
    slug: str
    title: str


TABS: List[Tab] = [
    Tab("grammar-checker", "Check English Grammar"),
    Tab("image-prompt", "Create Img Prompt"),
    Tab("sentence-rewriter", "Rewrite Sentence Better"),
    Tab("summarizer", "Summary Content"),
    Tab("clean-code", "Clean Code"),
    Tab("component-namer", "React Named Component from Content"),
    Tab("unit-test", "Create Unit Test"),
    Tab("story-book", "Create Story Book"),
]

PANEL_TYPES: Dict[str, Type[ToolPanel]] = {
    panel.slug: panel
    for panel in (
        GrammarCheckerPanel,
        ImagePromptPanel,
        SentenceRewriterPanel,
        SummarizerPanel,
        ComponentNamerPanel,
    )
}

DEFAULT_TAB = "component-namer"


def find_tab(slug: str) -> Tab:
    for tab in TABS:
        if tab.slug == slug:
            return tab
    raise KeyError(slug)


class Shell:
    """
    Tab switcher for one browser session.

    Exactly one tab is active. Selecting a tab mounts a fresh panel, so
    options, results and conversation logs do not survive a switch.
    Placeholder tabs mount no panel.
    """

    def __init__(self, gateway: ModelGateway, *, active: str = DEFAULT_TAB) -> None:
        self.gateway = gateway
        self.active_tab: Tab = find_tab(active)
        self.active_panel: Optional[ToolPanel] = self._mount(self.active_tab)

    def _mount(self, tab: Tab) -> Optional[ToolPanel]:
        panel_type = PANEL_TYPES.get(tab.slug)
        return panel_type(self.gateway) if panel_type else None

    def select(self, slug: str) -> Optional[ToolPanel]:
        tab = find_tab(slug)
        self.active_tab = tab
        self.active_panel = self._mount(tab)
        logger.info("Switched to tab %s (wired=%s)", slug, self.active_panel is not None)
        return self.active_panel

    def panel_for(self, slug: str) -> Optional[ToolPanel]:
        """Return the mounted panel if `slug` is the active tab, else None."""
        if self.active_tab.slug != slug:
            return None
        return self.active_panel


def create_panel(slug: str, gateway: ModelGateway) -> ToolPanel:
    """Build a standalone panel, e.g. for one-shot API calls. Raises KeyError for unwired tools."""
    return PANEL_TYPES[slug](gateway)


class ShellSessions:
    """
    In-memory map of session id to Shell. Nothing is persisted.

    At most `max_sessions` shells are kept; the least recently used one is
    dropped when a new session would exceed the limit.
    """

    def __init__(self, gateway: ModelGateway, *, max_sessions: int = 500) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.gateway = gateway
        self.max_sessions = max_sessions
        self._shells: OrderedDict[str, Shell] = OrderedDict()

    def get_or_create(self, session_id: Optional[str]) -> tuple[str, Shell]:
        if session_id and session_id in self._shells:
            self._shells.move_to_end(session_id)
            return session_id, self._shells[session_id]
        while len(self._shells) >= self.max_sessions:
            evicted, _ = self._shells.popitem(last=False)
            logger.info("Dropped least recently used tool shell %s", evicted)
        new_id = str(uuid4())
        shell = Shell(self.gateway)
        self._shells[new_id] = shell
        logger.info("Created tool shell for session %s", new_id)
        return new_id, shell

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._shells

    def __len__(self) -> int:
        return len(self._shells)
