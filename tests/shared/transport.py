from __future__ import annotations

import json
from collections.abc import Mapping, Sequence

from apiv7_request.config import Apiv7ClientConfig, CacheConfig


class Response:
    def __init__(
        self,
        status_code: int,
        payload: object = None,
        *,
        headers: Mapping[str, str] | None = None,
        raw: bytes | None = None,
    ):
        self.status_code = status_code
        self._payload = payload
        self.headers = dict(headers or {})
        if raw is not None:
            self.content = raw
        elif payload is None:
            self.content = b""
        else:
            self.content = json.dumps(payload).encode("utf-8")

    def json(self) -> object:
        return json.loads(self.content)


Step = Response | Exception


class SentRequest:
    def __init__(self, method: str, url: str, headers, body):
        self.method = method
        self.url = url
        self.headers = dict(headers or {})
        self.body = body


class SyncSequencedClient:
    def __init__(self, steps: Sequence[Step]):
        self.steps = list(steps)
        self.sent: list[SentRequest] = []
        self.closed = False

    @property
    def calls(self) -> int:
        return len(self.sent)

    def request(self, method, url, *, headers=None, json=None):
        self.sent.append(SentRequest(method, url, headers, json))
        step = self.steps.pop(0)
        if isinstance(step, Exception):
            raise step
        return step

    def close(self):
        self.closed = True


class AsyncSequencedClient:
    def __init__(self, steps: Sequence[Step]):
        self.steps = list(steps)
        self.sent: list[SentRequest] = []
        self.closed = False

    @property
    def calls(self) -> int:
        return len(self.sent)

    async def request(self, method, url, *, headers=None, json=None):
        self.sent.append(SentRequest(method, url, headers, json))
        step = self.steps.pop(0)
        if isinstance(step, Exception):
            raise step
        return step

    async def aclose(self):
        self.closed = True


def build_config(*, cache_enabled: bool = False, strict: bool = False) -> Apiv7ClientConfig:
    cfg = Apiv7ClientConfig(
        base_url="https://api.example.test/apiv7",
        cache=CacheConfig(enabled=cache_enabled),
        strict=strict,
    )
    cfg.validate()
    return cfg
