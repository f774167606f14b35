import io

import pytest

from kplkit.assembler import assemble, main
from kplkit.instructions import CodeBlock, CodeBlockFull, Instruction, OpCode


def test_simple_program():
    block = assemble("LC 5\nWRI\nHL\n")
    assert list(block) == [
        Instruction(OpCode.LC, 0, 5),
        Instruction(OpCode.WRI),
        Instruction(OpCode.HL),
    ]


def test_two_operands_are_p_then_q():
    block = assemble("LA 1 2 LV 3 4")
    assert (block[0].p, block[0].q) == (1, 2)
    assert (block[1].op, block[1].p, block[1].q) == (OpCode.LV, 3, 4)


def test_call_is_assembled_as_call():
    block = assemble("CALL 1 8")
    assert block[0] == Instruction(OpCode.CALL, 1, 8)


def test_unknown_words_are_skipped():
    block = assemble("nop LC 1 junk HL")
    assert [i.op for i in block] == [OpCode.LC, OpCode.HL]


def test_mnemonics_are_case_sensitive():
    assert len(assemble("hl lc 1")) == 0


def test_missing_operand_raises():
    with pytest.raises(ValueError):
        assemble("LA 1")


def test_bad_operand_raises():
    with pytest.raises(ValueError):
        assemble("J here")


def test_size_limit():
    with pytest.raises(CodeBlockFull):
        assemble("HL HL HL", max_size=2)


def test_main_writes_loadable_binary(tmp_path):
    source = "INT 4\nLC 7\nWRI\nWLN\nHL\n"
    src = tmp_path / "prog.asm"
    out = tmp_path / "prog.bin"
    src.write_text(source)
    assert main([str(src), str(out)]) == 0
    loaded = CodeBlock(100)
    loaded.load(io.BytesIO(out.read_bytes()))
    assert list(loaded) == list(assemble(source))


def test_main_without_arguments(capsys):
    assert main([]) == 1
    assert capsys.readouterr().out.startswith("Usage: smc")


def test_main_missing_input(tmp_path, capsys):
    assert main([str(tmp_path / "absent.asm"), str(tmp_path / "o.bin")]) == 1
    assert "Can't read input file!" in capsys.readouterr().out