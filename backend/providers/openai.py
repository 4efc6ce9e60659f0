# providers/openai.py
# OpenAI SDK calls (chat, whisper, vision) riding the shared httpx client.
# Single attempt; SDK errors fold into UpstreamError.

import logging
import httpx
import openai
from typing import List, Optional
from errors import UpstreamError
from utils import snippet

log = logging.getLogger("cliptotrip.openai")

DEFAULT_BASE_URL = "https://api.openai.com/v1"
WHISPER_MODEL = "whisper-1"


class OpenAIClient:
    def __init__(self, http: httpx.AsyncClient, api_key: str, base_url: str = DEFAULT_BASE_URL):
        self.sdk = openai.AsyncOpenAI(
            api_key=api_key,
            base_url=base_url.rstrip("/"),
            http_client=http,
            max_retries=0,
        )

    async def _send(self, label: str, call):
        try:
            return await call
        except openai.APIStatusError as e:
            body = snippet(e.response.text)
            log.warning("%s error %s: %s", label, e.status_code, snippet(body, 400))
            raise UpstreamError(f"OpenAI API error: {e.status_code} - {body}", status=e.status_code) from e
        except openai.APIConnectionError as e:
            # same wording the app uses for raw httpx failures
            cause = e.__cause__ or e
            log.warning("%s request failed: %r", label, cause)
            raise UpstreamError(f"Upstream request failed: {cause.__class__.__name__}") from e
        except openai.APIError as e:
            raise UpstreamError(f"Invalid response from OpenAI {label}") from e

    @staticmethod
    def _content(resp, label: str) -> str:
        try:
            content = resp.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            raise UpstreamError(f"Invalid response structure from OpenAI {label}") from e
        return (content or "").strip()

    async def chat(self, messages: List[dict], model: str, temperature: float = 0.7,
                   json_mode: bool = False) -> str:
        kwargs = {"model": model, "messages": messages, "temperature": temperature}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        resp = await self._send("chat", self.sdk.chat.completions.create(**kwargs))
        return self._content(resp, "API")

    async def transcribe(self, media: bytes, filename: str = "video.mp4") -> str:
        """Whisper accepts mp4 directly; no audio extraction step needed."""
        resp = await self._send(
            "transcription",
            self.sdk.audio.transcriptions.create(model=WHISPER_MODEL, file=(filename, media, "video/mp4")),
        )
        return (getattr(resp, "text", None) or "").strip()

    async def describe_image(self, image_url: str, prompt: str, model: str,
                             max_tokens: Optional[int] = 500) -> str:
        messages = [{
            "role": "user",
            "content": [
                {"type": "text", "text": prompt},
                {"type": "image_url", "image_url": {"url": image_url}},
            ],
        }]
        kwargs = {"model": model, "messages": messages}
        if max_tokens:
            kwargs["max_tokens"] = max_tokens
        resp = await self._send("vision", self.sdk.chat.completions.create(**kwargs))
        return self._content(resp, "vision API")
