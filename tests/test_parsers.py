from __future__ import annotations

import json

import pytest

from portfolio_chat.infra.prompting.parsers import extract_generated_text


@pytest.mark.parametrize(
    "body, expected",
    [
        ({"results": [{"generated_text": " from results "}]}, "from results"),
        ({"generation": "llama text"}, "llama text"),
        ({"outputText": "titan text"}, "titan text"),
        ({"completion": "claude text"}, "claude text"),
        ({"choices": [{"text": "completion text"}]}, "completion text"),
        ({"choices": [{"message": {"role": "assistant", "content": "chat text"}}]}, "chat text"),
    ],
)
def test_known_response_shapes(body: dict, expected: str) -> None:
    assert extract_generated_text(body) == expected


def test_priority_order() -> None:
    body = {"generation": "second", "results": [{"generated_text": "first"}], "completion": "third"}
    assert extract_generated_text(body) == "first"


def test_bytes_and_json_strings_are_decoded() -> None:
    raw = json.dumps({"generation": "bytes text"}).encode("utf-8")
    assert extract_generated_text(raw) == "bytes text"


@pytest.mark.parametrize("body", [b"not json", {}, {"results": []}, {"generation": 42}, None, []])
def test_unusable_bodies_give_empty_string(body: object) -> None:
    assert extract_generated_text(body) == ""
