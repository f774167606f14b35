"""Assembler from stack-machine mnemonics to the binary executable format."""

from __future__ import annotations

import sys
from collections.abc import Iterator

from .instructions import OPERAND_COUNT, CodeBlock, CodeBlockFull, OpCode

DEFAULT_MAX_SIZE = 1000

_MNEMONICS = {op.name: op for op in OpCode}


def _operand(words: Iterator[str], mnemonic: str) -> int:
    word = next(words, None)
    if word is None:
        raise ValueError(f"missing operand for {mnemonic}")
    try:
        return int(word)
    except ValueError:
        raise ValueError(f"bad operand {word!r} for {mnemonic}") from None


def assemble(text: str, max_size: int = DEFAULT_MAX_SIZE) -> CodeBlock:
    """Assemble whitespace-separated mnemonics and operands into a code block.

    Two-operand instructions take ``p`` then ``q``; one-operand ones take
    ``q``. Words that are not mnemonics are skipped.
    """
    block = CodeBlock(max_size)
    words = iter(text.split())
    for word in words:
        op = _MNEMONICS.get(word)
        if op is None:
            continue
        count = OPERAND_COUNT[op]
        if count == 2:
            p = _operand(words, word)
            q = _operand(words, word)
            block.emit(op, p, q)
        elif count == 1:
            block.emit(op, q=_operand(words, word))
        else:
            block.emit(op)
    return block


def main(argv: list[str] | None = None) -> int:
    """Assemble an input file into an output executable."""
    if argv is None:
        argv = sys.argv[1:]
    if len(argv) < 2:
        print("Usage: smc input output")
        print("   input: input stack machine assembly program")
        print("   output: output binary")
        return 1
    try:
        with open(argv[0], encoding="latin-1") as f:
            text = f.read()
    except OSError:
        print("smc: Can't read input file!")
        return 1
    try:
        block = assemble(text)
    except (ValueError, CodeBlockFull) as exc:
        print(f"smc: {exc}")
        return 1
    try:
        with open(argv[1], "wb") as f:
            block.save(f)
    except OSError:
        print("smc: Can't write output file!")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())