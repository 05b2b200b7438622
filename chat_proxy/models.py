from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict


class InputMessage(BaseModel):
    role: str
    content: str


class UpstreamPayload(BaseModel):
    model: str
    input: list[InputMessage]


class ChatRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", strict=True)

    message: str = ""


class FailureKind(str, Enum):
    TIMEOUT = "timeout"
    HTTP_ERROR = "http_error"
    NETWORK_ERROR = "network_error"
    PARSE_ERROR = "parse_error"
    BAD_REQUEST_BODY = "bad_request_body"
    INTERNAL = "internal"


@dataclass(frozen=True)
class UpstreamResult:
    """Outcome of one upstream call: reply text, or the kind of failure."""

    text: str = ""
    failure: FailureKind | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, text: str) -> "UpstreamResult":
        return cls(text=text)

    @classmethod
    def failed(cls, kind: FailureKind, detail: str | None = None) -> "UpstreamResult":
        return cls(failure=kind, detail=detail)
