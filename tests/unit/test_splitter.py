import pytest

from ragserver.services.splitter import SplitCriteria, split_content, split_paragraphs, split_sentences


def test_none_keeps_content_whole() -> None:
    text = "One. Two.\n\nThree."

    assert split_content(text, "none") == [text]


def test_blank_content_yields_no_chunks() -> None:
    assert split_content("   ", SplitCriteria.NONE) == []


def test_paragraphs_split_on_blank_lines() -> None:
    text = "First line\nstill first.\n\n  \nSecond.\n\n"

    assert split_paragraphs(text) == ["First line\nstill first.", "Second."]


def test_sentences_split_on_terminal_punctuation() -> None:
    text = "Is it? Yes! It is.\n\nNew paragraph"

    assert split_sentences(text) == ["Is it?", "Yes!", "It is.", "New paragraph"]


def test_sentences_split_on_full_width_punctuation() -> None:
    assert split_sentences("第一句。第二句！") == ["第一句。", "第二句！"]


def test_decimal_numbers_are_not_sentence_breaks() -> None:
    assert split_content("Pi is 3.14 roughly.", "sentence") == ["Pi is 3.14 roughly."]


def test_unknown_criteria_is_rejected() -> None:
    with pytest.raises(ValueError):
        split_content("text", "word")
