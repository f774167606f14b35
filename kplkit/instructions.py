"""Stack-machine instruction set, code blocks and their binary form."""

from __future__ import annotations

import struct
from collections.abc import Iterator
from dataclasses import dataclass
from enum import IntEnum
from typing import BinaryIO

TRUE = 1
FALSE = 0
DC_VALUE = 0
INT_SIZE = 1
CHAR_SIZE = 1

# One instruction on disk: opcode, p, q as little-endian 32-bit integers.
_RECORD = struct.Struct("<iii")


class OpCode(IntEnum):
    """Operations of the stack machine; the values are the on-disk opcodes."""

    LA = 0     # Load Address:    t := t + 1; s[t] := base(p) + q
    LV = 1     # Load Value:      t := t + 1; s[t] := s[base(p) + q]
    LC = 2     # Load Constant:   t := t + 1; s[t] := q
    LI = 3     # Load Indirect:   s[t] := s[s[t]]
    INT = 4    # Increment t:     t := t + q
    DCT = 5    # Decrement t:     t := t - q
    J = 6      # Jump:            pc := q
    FJ = 7     # False Jump:      if s[t] = 0 then pc := q; t := t - 1
    HL = 8     # Halt
    ST = 9     # Store:           s[s[t-1]] := s[t]; t := t - 2
    CALL = 10  # Call a procedure or function
    EP = 11    # Exit Procedure
    EF = 12    # Exit Function
    RC = 13    # Read Char
    RI = 14    # Read Integer
    WRC = 15   # Write Char
    WRI = 16   # Write Integer
    WLN = 17   # Write a line break
    AD = 18    # Add
    SB = 19    # Subtract
    ML = 20    # Multiply
    DV = 21    # Divide
    NEG = 22   # Negate
    CV = 23    # Copy Top
    EQ = 24    # Equal
    NE = 25    # Not Equal
    GT = 26    # Greater
    LT = 27    # Less
    GE = 28    # Greater or Equal
    LE = 29    # Less or Equal
    BP = 30    # Break point, switches on debugging


OPERAND_COUNT: dict[OpCode, int] = {
    op: 2 if op in (OpCode.LA, OpCode.LV, OpCode.CALL)
    else 1 if op in (OpCode.LC, OpCode.INT, OpCode.DCT, OpCode.J, OpCode.FJ)
    else 0
    for op in OpCode
}


@dataclass
class Instruction:
    """One machine instruction with its two operands."""

    op: OpCode
    p: int = DC_VALUE
    q: int = DC_VALUE

    def __str__(self) -> str:
        count = OPERAND_COUNT[self.op]
        if count == 2:
            return f"{self.op.name} {self.p},{self.q}"
        if count == 1:
            return f"{self.op.name} {self.q}"
        return self.op.name


class CodeBlockFull(Exception):
    """Raised when a code block cannot hold any more instructions."""


class CodeBlock:
    """A bounded, growable sequence of instructions."""

    def __init__(self, max_size: int) -> None:
        self.max_size = max_size
        self._code: list[Instruction] = []

    def emit(self, op: OpCode, p: int = DC_VALUE, q: int = DC_VALUE) -> Instruction:
        """Append an instruction and return it; raises CodeBlockFull when full."""
        if len(self._code) >= self.max_size:
            raise CodeBlockFull(f"code block holds at most {self.max_size} instructions")
        instruction = Instruction(OpCode(op), p, q)
        self._code.append(instruction)
        return instruction

    def __len__(self) -> int:
        return len(self._code)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self._code)

    def __getitem__(self, index: int) -> Instruction:
        return self._code[index]

    def listing(self) -> str:
        """Return the numbered listing, one ``address:  instruction`` line each."""
        return "".join(f"{address}:  {inst}\n" for address, inst in enumerate(self._code))

    def save(self, stream: BinaryIO) -> None:
        """Write the instructions to a binary stream."""
        stream.write(b"".join(_RECORD.pack(int(i.op), i.p, i.q) for i in self._code))

    def load(self, stream: BinaryIO) -> None:
        """Replace the contents with instructions read from a binary stream.

        Trailing bytes that do not make a whole instruction are ignored.
        Raises ValueError on an unknown opcode and CodeBlockFull when the
        stream holds more than ``max_size`` instructions.
        """
        data = stream.read()
        whole = len(data) - len(data) % _RECORD.size
        code = []
        for op, p, q in _RECORD.iter_unpack(data[:whole]):
            try:
                code.append(Instruction(OpCode(op), p, q))
            except ValueError:
                raise ValueError(f"unknown opcode {op}") from None
        if len(code) > self.max_size:
            raise CodeBlockFull(f"code block holds at most {self.max_size} instructions")
        self._code = code