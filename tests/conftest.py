from __future__ import annotations

from typing import Callable, List, Optional, Union

import pytest

from programming_helper.config import Settings
from programming_helper.errors import GatewayUnavailableError
from programming_helper.gateway import ModelGateway


class FakeGateway(ModelGateway):
    """Gateway double that records prompts and replays canned replies."""

    def __init__(
        self,
        reply: Union[str, Exception, Callable[[str], str]] = "",
        *,
        available: bool = True,
    ) -> None:
        super().__init__(None)
        self.reply = reply
        self.available = available
        self.prompts: List[str] = []

    @property
    def calls(self) -> int:
        return len(self.prompts)

    @property
    def last_prompt(self) -> Optional[str]:
        return self.prompts[-1] if self.prompts else None

    def is_available(self) -> bool:
        return self.available

    async def generate(self, prompt: str) -> str:
        if not self.available:
            raise GatewayUnavailableError("fake gateway is unavailable")
        self.prompts.append(prompt)
        if isinstance(self.reply, Exception):
            raise self.reply
        if callable(self.reply):
            return self.reply(prompt)
        return self.reply


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway("")


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, gemini_api_key=None)
