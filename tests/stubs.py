# Shared httpx.MockTransport stubs for Supabase/OpenAI/tikmate calls.

import json

import httpx

SUPABASE_URL = "https://proj.supabase.co"
OPENAI_CHAT = "https://api.openai.com/v1/chat/completions"
OPENAI_AUDIO = "https://api.openai.com/v1/audio/transcriptions"
AUTH_USER = f"{SUPABASE_URL}/auth/v1/user"
ITINERARIES = f"{SUPABASE_URL}/rest/v1/itineraries"

USER = {"id": "user-123", "email": "traveler@example.com"}


def reply(status_code: int = 200, **kwargs):
    return lambda request: httpx.Response(status_code, **kwargs)


def chat_reply(content: str):
    return reply(json={"choices": [{"message": {"role": "assistant", "content": content}}]})


class Upstream:
    """
    httpx.MockTransport handler keyed by (method, host, path). Each key holds a
    queue of handlers; the last one repeats.
    """

    def __init__(self) -> None:
        self._routes: dict[tuple[str, str, str], list] = {}
        self.calls: list[httpx.Request] = []

    def on(self, method: str, url: str, *handlers) -> "Upstream":
        u = httpx.URL(url)
        self._routes.setdefault((method, u.host, u.path), []).extend(handlers)
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        key = (request.method, request.url.host, request.url.path)
        queue = self._routes.get(key)
        if not queue:
            raise AssertionError(f"unexpected upstream call: {key}")
        handler = queue.pop(0) if len(queue) > 1 else queue[0]
        return handler(request)

    def to(self, method: str, url: str) -> list[httpx.Request]:
        u = httpx.URL(url)
        return [r for r in self.calls if r.method == method and r.url.host == u.host and r.url.path == u.path]


def echo_insert(request: httpx.Request) -> httpx.Response:
    row = json.loads(request.content)
    row.update({"id": "itin-1", "created_at": "2026-10-19T12:00:00+00:00"})
    return httpx.Response(201, json=[row])


