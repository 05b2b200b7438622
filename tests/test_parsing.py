import pytest

from chat_proxy.parsing import extract_output_text


def test_concatenates_output_text_in_order():
    document = {
        "output": [
            {"type": "reasoning", "summary": []},
            {
                "type": "message",
                "content": [
                    {"type": "output_text", "text": "  Hello, "},
                    {"type": "refusal", "refusal": "no"},
                    {"type": "output_text", "text": "world"},
                ],
            },
            {"type": "message", "content": [{"type": "output_text", "text": "!\n"}]},
        ]
    }

    assert extract_output_text(document) == "Hello, world!"


def test_top_level_output_text_fallback():
    assert extract_output_text({"output_text": "hello"}) == "hello"


def test_fallback_used_when_output_has_no_text():
    document = {
        "output": [{"type": "message", "content": [{"type": "refusal"}]}],
        "output_text": " fallback ",
    }

    assert extract_output_text(document) == "fallback"


def test_output_pieces_win_over_fallback():
    document = {
        "output": [{"content": [{"type": "output_text", "text": "primary"}]}],
        "output_text": "secondary",
    }

    assert extract_output_text(document) == "primary"


@pytest.mark.parametrize(
    "document",
    [
        {},
        {"output": "not a list"},
        {"output": [None, 3, "x", {"content": "nope"}, {"content": [None, 7]}]},
        {"output": [{"content": [{"type": "output_text", "text": 42}]}]},
        {"output_text": ["not", "a", "string"]},
        [],
        None,
        "plain text",
    ],
)
def test_unexpected_shapes_give_empty_text(document):
    assert extract_output_text(document) == ""
