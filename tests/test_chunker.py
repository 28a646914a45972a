"""Tests for message splitting"""
import pytest

from core.messaging.chunker import split_message


def _squash(text):
    return "".join(text.split())


def test_empty_text_gives_single_empty_chunk():
    assert split_message("") == [""]


def test_short_text_returned_untrimmed():
    assert split_message("  hello there  ", max_length=20) == ["  hello there  "]


def test_text_exactly_at_limit_is_one_chunk():
    text = "a" * 50
    assert split_message(text, max_length=50) == [text]


def test_chunks_respect_max_length_and_are_non_empty():
    text = "lorem ipsum dolor sit amet, consectetur adipiscing elit. " * 80
    chunks = split_message(text, max_length=120)

    assert len(chunks) > 1
    assert all(0 < len(chunk) <= 120 for chunk in chunks)


def test_chunks_preserve_all_content():
    text = (
        "Strengths\n\nYour resume lists Python and Docker clearly. "
        "The summary is short! Consider quantifying impact?\n"
        "Formatting: keep bullets consistent across roles. " * 30
    )
    chunks = split_message(text, max_length=200)

    assert _squash("".join(chunks)) == _squash(text)


def test_prefers_paragraph_break():
    text = "A" * 60 + "\n\n" + "B" * 60
    assert split_message(text, max_length=100) == ["A" * 60, "B" * 60]


def test_sentence_cut_keeps_terminator_on_first_chunk():
    text = "x" * 60 + ". " + "y" * 60
    assert split_message(text, max_length=100) == ["x" * 60 + ".", "y" * 60]


def test_falls_back_to_line_break_then_word_break():
    line_text = "a" * 70 + "\n" + "b" * 70
    assert split_message(line_text, max_length=100) == ["a" * 70, "b" * 70]

    word_text = "c" * 70 + " " + "d" * 70
    assert split_message(word_text, max_length=100) == ["c" * 70, "d" * 70]


def test_boundary_in_first_half_forces_hard_cut():
    text = "a" * 10 + "\n\n" + "b" * 150
    chunks = split_message(text, max_length=100)

    assert chunks[0] == text[:100]
    assert len(chunks[0]) == 100
    assert chunks[1] == "b" * 62


def test_single_long_word_is_hard_cut():
    assert split_message("x" * 250, max_length=100) == ["x" * 100, "x" * 100, "x" * 50]


def test_rejects_non_positive_limit():
    with pytest.raises(ValueError):
        split_message("text", max_length=0)
