"""
Reply decoder tests.

Models wrap their JSON in prose, think out loud, and leave raw newlines in
strings. The decoder has to cope with all of it and never raise.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from agent.conversion.reply_decoder import (
    extract_answer,
    find_balanced_json,
    fix_control_characters,
)


def test_plain_json():
    answer = extract_answer('{"message":"hi"}', "Bot")
    assert answer.message == "hi"
    assert answer.author is None


def test_json_embedded_in_noise():
    answer = extract_answer('noise {"message":"hi"} trailing', "Bot")
    assert answer.message == "hi"


def test_raw_newline_inside_string():
    answer = extract_answer('{"message":"line1\nline2"}', "Bot")
    assert answer.message == "line1\nline2"


def test_not_json_falls_back_to_text():
    answer = extract_answer("not json at all", "Bot")
    assert answer.to_dict() == {"message": "not json at all", "author": "Bot", "type": "text"}


def test_all_fields():
    answer = extract_answer(
        '{"message": "nice", "author": "Roboto", "type": "text", "emojiReact": "👍"}',
        "Bot",
    )
    assert answer.author == "Roboto"
    assert answer.type == "text"
    assert answer.emoji_react == "👍"


def test_think_spans_are_removed():
    raw = '<think>\nThe user wants a greeting. {"message": "wrong"}\n</think>\n{"message": "hello"}'
    assert extract_answer(raw, "Bot").message == "hello"


@pytest.mark.parametrize("raw", ["", "   ", "<think>only thinking</think>", None])
def test_nothing_left_returns_none(raw):
    assert extract_answer(raw, "Bot") is None


def test_nested_object_needs_balanced_scan():
    raw = 'Sure! {"message": "a", "meta": {"k": 1}} done'
    assert extract_answer(raw, "Bot").message == "a"


def test_brace_inside_string():
    raw = 'x {"message": "use } carefully"} y'
    assert extract_answer(raw, "Bot").message == "use } carefully"


def test_null_message_is_kept():
    answer = extract_answer('{"message": null, "author": "Bot"}', "Bot")
    assert answer is not None
    assert answer.message is None


def test_object_without_message_is_plain_text():
    answer = extract_answer('{"foo": 1}', "Bot")
    assert answer.message == '{"foo": 1}'
    assert answer.type == "text"


def test_array_is_plain_text():
    answer = extract_answer("[1, 2]", "Bot")
    assert answer.message == "[1, 2]"
    assert answer.author == "Bot"


def test_unbalanced_json_is_plain_text():
    raw = 'almost {"message": "hi"'
    assert extract_answer(raw, "Bot").message == raw


@pytest.mark.parametrize("raw", [
    "[" * 100000,
    "x " + "[" * 5000 + "]" * 5000,
])
def test_deeply_nested_reply_is_plain_text(raw):
    answer = extract_answer(raw, "Bot")
    assert answer.message == raw
    assert answer.author == "Bot"


# --- Helpers ---


def test_fix_control_characters_only_inside_strings():
    raw = '{\n"a": "x\ty\nz"\n}'
    assert fix_control_characters(raw) == '{\n"a": "x\\ty\\nz"\n}'


@pytest.mark.parametrize("ch, escape", [
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\t", "\\t"),
    ("\b", "\\b"),
    ("\f", "\\f"),
])
def test_fix_control_characters_escapes_each_control(ch, escape):
    raw = '{"message": "x' + ch + 'y"}'
    assert fix_control_characters(raw) == '{"message": "x' + escape + 'y"}'
    assert extract_answer(raw, "Bot").message == "x" + ch + "y"


def test_fix_control_characters_honors_escaped_quotes():
    raw = '{"a": "say \\"hi\\"\n"}'
    assert fix_control_characters(raw) == '{"a": "say \\"hi\\"\\n"}'


def test_find_balanced_json():
    assert find_balanced_json('pre [1, {"a": "]"}] post') == '[1, {"a": "]"}]'
    assert find_balanced_json("no json here") is None
    assert find_balanced_json('{"a": 1') is None
    assert find_balanced_json("{]") is None
