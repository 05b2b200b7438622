from __future__ import annotations

from typing import Any


OUTPUT_TEXT = "output_text"


def _iter_output_text(output: list[Any]):
    for item in output:
        if not isinstance(item, dict):
            continue
        content = item.get("content")
        if not isinstance(content, list):
            continue
        for piece in content:
            if not isinstance(piece, dict) or piece.get("type") != OUTPUT_TEXT:
                continue
            text = piece.get("text")
            if isinstance(text, str):
                yield text


def extract_output_text(document: Any) -> str:
    """Collect the assistant text from a responses-style document.

    Walks ``output[].content[]`` and concatenates every ``output_text`` piece in
    order. When that yields nothing, a top-level ``output_text`` string is used
    instead. Anything of an unexpected shape is skipped, so the result is the
    empty string rather than an error when the document carries no text.
    """
    if not isinstance(document, dict):
        return ""

    text = ""
    output = document.get("output")
    if isinstance(output, list):
        text = "".join(_iter_output_text(output))

    if not text:
        fallback = document.get(OUTPUT_TEXT)
        if isinstance(fallback, str):
            text = fallback

    return text.strip()
