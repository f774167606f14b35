"""Interpreter for stack-machine executables."""

from __future__ import annotations

import operator
import re
import string
import sys
from collections.abc import Callable, Iterable
from enum import IntEnum
from typing import TextIO

from .instructions import FALSE, TRUE, CodeBlock, CodeBlockFull, Instruction, OpCode

DEFAULT_STACK_SIZE = 2048
DEFAULT_CODE_SIZE = 1024


class ProgramStatus(IntEnum):
    """State of the machine; the last four are how a run ends."""

    ACTIVE = 0
    INACTIVE = 1
    NORMAL_EXIT = 2
    IO_ERROR = 3
    DIVIDE_BY_ZERO = 4
    STACK_OVERFLOW = 5


class _MemoryFault(Exception):
    pass


def _wrap(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def _divide(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


_COMPARISONS: dict[OpCode, Callable[[int, int], bool]] = {
    OpCode.EQ: operator.eq,
    OpCode.NE: operator.ne,
    OpCode.GT: operator.gt,
    OpCode.LT: operator.lt,
    OpCode.GE: operator.ge,
    OpCode.LE: operator.le,
}

_ARITHMETIC: dict[OpCode, Callable[[int, int], int]] = {
    OpCode.AD: operator.add,
    OpCode.SB: operator.sub,
    OpCode.ML: operator.mul,
}


class VirtualMachine:
    """Executes instructions on a word stack with frame base ``b`` and top ``t``."""

    def __init__(
        self,
        code: CodeBlock | Iterable[Instruction],
        stack_size: int = DEFAULT_STACK_SIZE,
        input_stream: TextIO | None = None,
        output_stream: TextIO | None = None,
        debug: bool = False,
    ) -> None:
        self.code = list(code)
        self.stack_size = stack_size
        self.stack = [0] * max(stack_size, 0)
        self.input = input_stream if input_stream is not None else sys.stdin
        self.output = output_stream if output_stream is not None else sys.stdout
        self.debug = debug
        self._pending: str | None = None
        self.reset()

    def reset(self) -> None:
        """Put the machine back at the start of the program."""
        self.pc = 0
        self.t = -1
        self.b = 0
        self.status = ProgramStatus.INACTIVE

    def base(self, level: int) -> int:
        """Return the frame base ``level`` static links out from the current one."""
        current = self.b
        for _ in range(level):
            current = self._load(current + 3)
        return current

    def dump_memory(self) -> str:
        """Return the stack contents up to the top as text."""
        rows = "".join(f"  {i:4d}: {v}\n" for i, v in enumerate(self.stack[: self.t + 1]))
        return f"Start dumping...\n{rows}Finish dumping!\n"

    # -- memory ---------------------------------------------------------

    def _load(self, address: int) -> int:
        if not 0 <= address < self.stack_size:
            raise _MemoryFault(address)
        return self.stack[address]

    def _store(self, address: int, value: int) -> None:
        if not 0 <= address < self.stack_size:
            raise _MemoryFault(address)
        self.stack[address] = value

    def _push(self, value: int) -> None:
        self.t += 1
        self._store(self.t, value)

    def _check_top(self) -> None:
        if self.t >= self.stack_size:
            raise _MemoryFault(self.t)

    # -- input and output -----------------------------------------------

    def _write(self, text: str) -> None:
        self.output.write(text)

    def _read(self) -> str | None:
        if self._pending is not None:
            ch, self._pending = self._pending, None
            return ch
        flush = getattr(self.output, "flush", None)
        if flush is not None:
            flush()
        ch = self.input.read(1)
        return ch or None

    def _read_int(self) -> int | None:
        ch = self._read()
        while ch is not None and ch.isspace():
            ch = self._read()
        text = ""
        if ch in ("+", "-"):
            text, ch = ch, self._read()
        digits = ""
        while ch is not None and ch in string.digits:
            digits += ch
            ch = self._read()
        if ch is not None:
            self._pending = ch
        if not digits:
            return None
        return _wrap(int(text + digits))

    # -- execution ------------------------------------------------------

    def _execute(self, inst: Instruction) -> None:
        op, p, q = inst.op, inst.p, inst.q
        match op:
            case OpCode.LA:
                self._push(self.base(p) + q)
            case OpCode.LV:
                self._push(self._load(self.base(p) + q))
            case OpCode.LC:
                self._push(q)
            case OpCode.LI:
                self._store(self.t, self._load(self._load(self.t)))
            case OpCode.INT:
                self.t += q
                self._check_top()
            case OpCode.DCT:
                self.t -= q
                self._check_top()
            case OpCode.J:
                self.pc = q - 1
            case OpCode.FJ:
                if self._load(self.t) == FALSE:
                    self.pc = q - 1
                self.t -= 1
            case OpCode.HL:
                self.status = ProgramStatus.NORMAL_EXIT
            case OpCode.ST:
                self._store(self._load(self.t - 1), self._load(self.t))
                self.t -= 2
            case OpCode.CALL:
                t = self.t
                self._store(t + 2, self.b)  # dynamic link
                self._store(t + 3, self.pc)  # return address
                self._store(t + 4, self.base(p))  # static link
                self.b = t + 1
                self.pc = q - 1
            case OpCode.EP | OpCode.EF:
                b = self.b
                self.t = b - 1 if op is OpCode.EP else b
                self.pc = self._load(b + 2)
                self.b = self._load(b + 1)
            case OpCode.RC:
                ch = self._read()
                if ch is None:
                    self.status = ProgramStatus.IO_ERROR
                else:
                    self._push(ord(ch))
            case OpCode.RI:
                value = self._read_int()
                if value is None:
                    self.status = ProgramStatus.IO_ERROR
                else:
                    self._push(value)
            case OpCode.WRC:
                self._write(chr(self._load(self.t) & 0xFF))
                self.t -= 1
            case OpCode.WRI:
                self._write(str(self._load(self.t)))
                self.t -= 1
            case OpCode.WLN:
                self._write("\n")
            case OpCode.DV:
                self.t -= 1
                divisor = self._load(self.t + 1)
                if divisor == 0:
                    self.status = ProgramStatus.DIVIDE_BY_ZERO
                else:
                    self._store(self.t, _wrap(_divide(self._load(self.t), divisor)))
            case OpCode.NEG:
                self._store(self.t, _wrap(-self._load(self.t)))
            case OpCode.CV:
                self._store(self.t + 1, self._load(self.t))
                self.t += 1
            case OpCode.BP:
                self.debug = True
            case _ if op in _ARITHMETIC:
                self.t -= 1
                result = _ARITHMETIC[op](self._load(self.t), self._load(self.t + 1))
                self._store(self.t, _wrap(result))
            case _ if op in _COMPARISONS:
                self.t -= 1
                holds = _COMPARISONS[op](self._load(self.t), self._load(self.t + 1))
                self._store(self.t, TRUE if holds else FALSE)

    def _debug_prompt(self) -> None:
        while True:
            command = self._read()
            if command is None:
                return
            command = command.lower()
            try:
                if command in ("a", "m"):
                    self._write("\nEnter memory location (level, offset):")
                    level, offset = self._read_int(), self._read_int()
                    if level is None or offset is None:
                        return
                    address = self.base(level) + offset
                    if command == "a":
                        self._write(f"Absolute address = {address}\n")
                    else:
                        self._write(f"Value = {self._load(address)}\n")
                elif command == "t":
                    self._write(f"Top ({self.t}) = {self._load(self.t)}\n")
                elif command == "c":
                    self.debug = False
                    return
                elif command == "h":
                    self.status = ProgramStatus.NORMAL_EXIT
                    return
                else:
                    return
            except _MemoryFault as fault:
                self._write(f"Invalid address {fault.args[0]}\n")

    def run(self) -> ProgramStatus:
        """Run until the program halts or fails and return the final status."""
        self.status = ProgramStatus.ACTIVE
        count = 0
        while self.status is ProgramStatus.ACTIVE:
            if not 0 <= self.pc < len(self.code):
                raise RuntimeError(f"program counter {self.pc} is outside the code")
            inst = self.code[self.pc]
            if self.debug:
                self._write(f"{count:6d}-{self.pc:<4d}:  {inst}\n")
                count += 1
            try:
                self._execute(inst)
            except _MemoryFault:
                self.status = ProgramStatus.STACK_OVERFLOW
                break
            if self.debug:
                self._debug_prompt()
            self.pc += 1
        return self.status


_USAGE = (
    "Usage: kplrun input [-s=stack_size] [-c=code_size] [-debug] [-dump]\n"
    "   input: input kpl program\n"
    "   -s=stack_size: set the stack size\n"
    "   -c=code_size: set the code size\n"
    "   -debug: enable code dump\n"
)

_LEADING_INT = re.compile(r"\s*[+-]?\d+")

_RUNTIME_MESSAGES = {
    ProgramStatus.DIVIDE_BY_ZERO: "Runtime error: Divide by zero!",
    ProgramStatus.STACK_OVERFLOW: "Runtime error: Stack overflow!",
    ProgramStatus.IO_ERROR: "Runtime error: IO error!",
}


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group()) if match else 0


def main(argv: list[str] | None = None) -> int:
    """Load and run an executable: ``input [-s=N] [-c=N] [-debug] [-dump]``."""
    if argv is None:
        argv = sys.argv[1:]
    if not argv:
        print("kplrun: no input file.")
        print(_USAGE, end="")
        return 1

    stack_size, code_size, debug, dump = DEFAULT_STACK_SIZE, DEFAULT_CODE_SIZE, False, False
    for param in argv[1:]:
        if param.startswith("-s="):
            stack_size = _atoi(param[3:])
        elif param.startswith("-c="):
            code_size = _atoi(param[3:])
        elif param == "-debug":
            debug = True
        elif param == "-dump":
            dump = True
        else:
            print(_USAGE, end="")
            return 1

    block = CodeBlock(code_size)
    try:
        with open(argv[0], "rb") as f:
            try:
                block.load(f)
            except (ValueError, CodeBlockFull):
                print("kplrun: Wrong executable format!")
                return 1
    except OSError:
        print("kplrun: Can't read input file!")
        return 1

    if dump:
        print(block.listing(), end="")
        return 0

    status = VirtualMachine(block, stack_size=stack_size, debug=debug).run()
    if status in _RUNTIME_MESSAGES:
        print(_RUNTIME_MESSAGES[status])
    return 0


if __name__ == "__main__":
    sys.exit(main())