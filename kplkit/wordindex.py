"""Word index of a passage: each word with its count and the lines it occurs on."""

from __future__ import annotations

import re
import string
import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

_EDGE_NON_LETTERS = re.compile(r"^[^A-Za-z]+|[^A-Za-z]+$")
_SEPARATORS = re.compile(r"[ \t\n]+")
_UPPER_TO_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def format_word(text: str) -> str:
    """Lower-case ASCII letters and strip non-letters from both ends."""
    return _EDGE_NON_LETTERS.sub("", text.translate(_UPPER_TO_LOWER))


def is_valid_word(text: str) -> bool:
    """Return True if ``text`` holds no decimal digit."""
    return not any(ch in string.digits for ch in text)


@dataclass
class WordEntry:
    """A word, how often it occurs and the lines it occurs on."""

    word: str
    count: int = 0
    lines: list[int] = field(default_factory=list)

    def format(self) -> str:
        line_text = "".join(f",{n}" for n in self.lines)
        return f"{self.word:<15} {self.count} {line_text}"


class WordIndex:
    """Words kept in lexicographic order with their occurrences."""

    def __init__(self) -> None:
        self._entries: dict[str, WordEntry] = {}

    def insert(self, word: str, line: int) -> WordEntry:
        """Record one occurrence of ``word`` on ``line``."""
        entry = self._entries.setdefault(word, WordEntry(word))
        entry.count += 1
        if line not in entry.lines:
            entry.lines.append(line)
        return entry

    def search(self, word: str) -> WordEntry | None:
        """Return the entry of ``word``, or None if it is not indexed."""
        return self._entries.get(word)

    def __contains__(self, word: object) -> bool:
        return word in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[WordEntry]:
        for word in sorted(self._entries):
            yield self._entries[word]

    def format(self) -> str:
        """Return the index as text, one ``word count ,line,line`` row per word."""
        return "".join(entry.format() + "\n" for entry in self)


def build_index(stop_words: str | Iterable[str], passage: str) -> WordIndex:
    """Index the words of ``passage`` that contain no digit and are not stop words.

    ``stop_words`` is either whitespace-separated text or an iterable of words.
    """
    words = stop_words.split() if isinstance(stop_words, str) else stop_words
    stops = {format_word(w) for w in words}
    index = WordIndex()
    for line_no, line in enumerate(passage.split("\n"), start=1):
        for raw in _SEPARATORS.split(line):
            if not raw or not is_valid_word(raw):
                continue
            word = format_word(raw)
            if word and word not in stops:
                index.insert(word, line_no)
    return index


def main(argv: list[str] | None = None) -> int:
    """Print the index of a passage; paths default to stopw.txt and vanban.txt."""
    if argv is None:
        argv = sys.argv[1:]
    stop_path = argv[0] if len(argv) > 0 else "stopw.txt"
    passage_path = argv[1] if len(argv) > 1 else "vanban.txt"
    try:
        with open(stop_path, encoding="latin-1") as f:
            stop_text = f.read()
        with open(passage_path, encoding="latin-1") as f:
            passage = f.read()
    except OSError as exc:
        print(f"Can't read input file: {exc.filename}")
        return 1
    sys.stdout.write(build_index(stop_text, passage).format())
    return 0


if __name__ == "__main__":
    sys.exit(main())