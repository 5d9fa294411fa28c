import logging
from typing import Any, Optional

import httpx

from .config import Settings
from .errors import ConfigurationError, GatewayUnavailableError, TransportOrModelError

logger = logging.getLogger(__name__)

BLOCKING_FINISH_REASONS = {"SAFETY", "RECITATION", "BLOCKLIST", "PROHIBITED_CONTENT", "SPII"}


class GeminiClient:
    """
    Minimal REST client for the Gemini `generateContent` endpoint.

    This client:
      - authenticates with an API key header
      - sends the prompt as the only user turn of the request
      - returns the concatenated text parts of the first candidate
    """

    def __init__(
        self,
        *,
        api_key: str,
        model_name: str,
        base_url: str,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not api_key or not api_key.strip():
            raise ConfigurationError("Gemini API key is empty")
        if not model_name:
            raise ConfigurationError("Model name is empty")
        try:
            url = httpx.URL(base_url)
        except httpx.InvalidURL as exc:
            raise ConfigurationError(f"Invalid API base URL {base_url!r}: {exc}") from exc
        if url.scheme not in ("http", "https") or not url.host:
            raise ConfigurationError(f"Invalid API base URL {base_url!r}")

        self.model_name = model_name
        self.endpoint = f"{str(url).rstrip('/')}/models/{model_name}:generateContent"
        self._api_key = api_key.strip()
        self._timeout = timeout
        self._transport = transport

    async def generate_content(self, prompt: str) -> str:
        payload = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}

        logger.info("Sending prompt to model=%s (%d chars)", self.model_name, len(prompt))
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(
                    self.endpoint,
                    headers={
                        "x-goog-api-key": self._api_key,
                        "Content-Type": "application/json",
                    },
                    json=payload,
                )
        except httpx.HTTPError as exc:
            raise TransportOrModelError(f"Request to the model failed: {exc}") from exc

        if response.is_error:
            raise TransportOrModelError(
                _error_message(response),
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise TransportOrModelError("Model returned a response that is not valid JSON") from exc

        text = _extract_text(data)
        logger.info("Received model response (%d chars)", len(text))
        return text


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        message = body["error"].get("message")
        if message:
            return f"[{response.status_code}] {message}"
    return f"[{response.status_code}] {response.reason_phrase or 'Model request failed'}"


def _extract_text(data: Any) -> str:
    if not isinstance(data, dict):
        raise TransportOrModelError(f"Unexpected model response: expected an object, got {type(data).__name__}")
    candidates = data.get("candidates") or []
    if not candidates:
        feedback = data.get("promptFeedback")
        block_reason = feedback.get("blockReason") if isinstance(feedback, dict) else None
        if block_reason:
            raise TransportOrModelError(f"Prompt was blocked by the model: {block_reason}")
        return ""

    candidate = candidates[0] if isinstance(candidates, list) else None
    if not isinstance(candidate, dict):
        raise TransportOrModelError("Unexpected model response: malformed candidate")
    content = candidate.get("content") or {}
    parts = content.get("parts") if isinstance(content, dict) else None
    if parts is None:
        parts = []
    if not isinstance(parts, list):
        raise TransportOrModelError("Unexpected model response: malformed content parts")
    text = "".join(
        part["text"] for part in parts if isinstance(part, dict) and isinstance(part.get("text"), str)
    )
    finish_reason = candidate.get("finishReason")
    if not text and isinstance(finish_reason, str) and finish_reason in BLOCKING_FINISH_REASONS:
        raise TransportOrModelError(f"Response was blocked by the model: {finish_reason}")
    return text


class ModelGateway:
    """
    Single access point to the hosted model.

    Built once at startup and read-only afterwards. Panels receive it by
    parameter and must check `is_available()` before calling `generate`.
    """

    def __init__(self, client: Optional[GeminiClient] = None) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "ModelGateway":
        if not settings.gemini_api_key:
            logger.warning(
                "Gemini API key (PH_GEMINI_API_KEY / GEMINI_API_KEY) not found in environment variables."
            )
            return cls(None)
        try:
            client = GeminiClient(
                api_key=settings.gemini_api_key,
                model_name=settings.model_name,
                base_url=settings.api_base_url,
                timeout=settings.request_timeout,
            )
        except ConfigurationError as exc:
            logger.error("Error initializing Gemini client. Check API key or configuration: %s", exc)
            return cls(None)
        return cls(client)

    @property
    def model_name(self) -> Optional[str]:
        return self._client.model_name if self._client else None

    def is_available(self) -> bool:
        return self._client is not None

    async def generate(self, prompt: str) -> str:
        if self._client is None:
            raise GatewayUnavailableError("Model gateway is not configured; check is_available() first")
        return await self._client.generate_content(prompt)
