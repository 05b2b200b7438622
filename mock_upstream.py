from __future__ import annotations

import asyncio
import os
from typing import Any

from fastapi import FastAPI, Request

app = FastAPI()

# Seconds to stall before answering; set above REQUEST_TIMEOUT to exercise the proxy timeout.
MOCK_DELAY = float(os.getenv("MOCK_DELAY", "0"))


def _answer_for(question: str) -> str:
    words = question.split()
    snippet = " ".join(words[:20])
    return f"Thanks for asking about: {snippet}{'...' if len(words) > 20 else ''}"


@app.post("/v1/responses")
async def responses(request: Request):
    body: dict[str, Any] = await request.json()
    if MOCK_DELAY:
        await asyncio.sleep(MOCK_DELAY)

    items = body.get("input", [])
    question = next(
        (m.get("content", "") for m in items if m.get("role") == "user"), ""
    )
    answer = _answer_for(question)
    return {
        "id": "resp_mock",
        "model": body.get("model"),
        "output": [
            {
                "type": "message",
                "role": "assistant",
                "content": [{"type": "output_text", "text": answer}],
            }
        ],
    }
