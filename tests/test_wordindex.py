import pytest

from kplkit.wordindex import (
    WordEntry,
    WordIndex,
    build_index,
    format_word,
    is_valid_word,
    main,
)


def test_format_word_lowercases_and_strips():
    assert format_word("Hello,") == "hello"
    assert format_word('"World!"') == "world"


def test_format_word_only_punctuation_is_empty():
    assert format_word("---") == ""


@pytest.mark.parametrize("text", ["Abc", "x.y", "(Word)"])
def test_format_word_is_idempotent(text):
    once = format_word(text)
    assert format_word(once) == once


@pytest.mark.parametrize("text,expected", [("abc", True), ("a1", False), ("2024", False), ("", True)])
def test_is_valid_word(text, expected):
    assert is_valid_word(text) is expected


def test_insert_counts_and_lines():
    index = WordIndex()
    index.insert("cat", 1)
    index.insert("cat", 1)
    entry = index.insert("cat", 3)
    assert entry.count == 3
    assert entry.lines == [1, 3]
    assert index.search("cat") is entry


def test_search_missing_word():
    index = WordIndex()
    index.insert("dog", 2)
    assert index.search("cat") is None
    assert "dog" in index


def test_iteration_is_sorted():
    index = WordIndex()
    for word in ["pear", "apple", "melon"]:
        index.insert(word, 1)
    words = [entry.word for entry in index]
    assert words == sorted(words)
    assert len(index) == 3


def test_entry_format_layout():
    entry = WordEntry("cat", 2, [1, 2])
    assert entry.format() == "cat".ljust(15) + " 2 ,1,2"


def test_build_index_skips_stop_words_and_digits():
    index = build_index("the a", "The cat saw a dog\nthe dog ran 3 km4")
    assert index.search("the") is None
    assert index.search("km4") is None
    dog = index.search("dog")
    assert dog.count == 2
    assert dog.lines == [1, 2]
    assert [e.word for e in index] == ["cat", "dog", "ran", "saw"]


def test_build_index_accepts_word_list():
    index = build_index(["Cat"], "cat bird")
    assert [e.word for e in index] == ["bird"]


def test_build_index_skips_empty_words():
    index = build_index("", "--- owl")
    assert [e.word for e in index] == ["owl"]


def test_format_has_one_row_per_word():
    index = build_index("", "b a\na")
    rows = index.format().splitlines()
    assert rows == [e.format() for e in index]
    assert rows[0].split() == ["a", "2", ",1,2"]


def test_main_prints_index(tmp_path, capsys):
    stop = tmp_path / "stop.txt"
    passage = tmp_path / "text.txt"
    stop.write_text("and\n")
    passage.write_text("Fish and chips\nfish\n")
    assert main([str(stop), str(passage)]) == 0
    out = capsys.readouterr().out
    assert out == build_index("and", "Fish and chips\nfish\n").format()
    assert "and" not in out.split()


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "none.txt"), str(tmp_path / "none2.txt")]) == 1
    assert "Can't read input file" in capsys.readouterr().out