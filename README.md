# kplkit

Building blocks for KPL, a small Pascal-like teaching language, and for
the stack machine it compiles to:

- `kplkit.charcode`: `char_code()` sorts a character into a `CharCode`
  class (letter, digit, space, each punctuation symbol, unknown);
- `kplkit.tokens`: `TokenType`, the `Token` record (with `describe()`,
  which gives the `line-col:KIND` form), `check_keyword()` and
  `token_to_string()`;
- `kplkit.reader`: `CharReader`, which reads a text stream a character at a
  time and keeps the line and column, and `open_reader()` for files;
- `kplkit.symtab`: types (`int_type()`, `char_type()`, `array_type()`),
  constants, nested `Scope`s with frame offsets, the symbol classes and
  `SymbolTable`, which comes with the built-in `READI`, `READC`, `WRITEI`,
  `WRITEC` and `WRITELN`;
- `kplkit.debug`: `format_type()`, `format_constant()`, `format_symbol()`
  and `format_scope()` print a symbol table as text;
- `kplkit.instructions`: the `OpCode` set, `Instruction` and `CodeBlock`,
  which lists code and saves it to or loads it from the binary executable
  format (three little-endian 32-bit integers per instruction);
- `kplkit.codegen`: `CodeGenerator`, which emits loads, stores, calls and
  jumps for the symbols of a `SymbolTable` and writes the code to a file;
- `kplkit.assembler`: `assemble()` turns textual stack-machine programs into
  a `CodeBlock`;
- `kplkit.vm`: `VirtualMachine` runs a code block;
- `kplkit.wordindex`: a word index over a text passage.

## Installing

```
pip install .
```

The package needs nothing beyond the standard library. For the tests:

```
pip install .[test]
pytest
```

## Commands

Assemble a textual stack-machine program into a binary executable:

```
smc program.asm program.bin
```

The input is a list of mnemonics (`LA`, `LC`, `WRI`, `HL`, ...) separated
by whitespace. `LA`, `LV` and `CALL` take two operands, `p` then `q`;
`LC`, `INT`, `DCT`, `J` and `FJ` take one; words that are not mnemonics
are skipped. At most 1000 instructions are accepted.

Run an executable on the stack machine:

```
kplrun program.bin [-s=stack_size] [-c=code_size] [-debug] [-dump]
```

`-s=` and `-c=` set the stack and code sizes (2048 and 1024 words by
default) and `-dump` prints the loaded code instead of running it. With
`-debug` every executed instruction is printed, and after each one a
command character is read from standard input: `a` or `m` ask for a level
and an offset and print the absolute address or the value stored there,
`t` prints the top of the stack, `c` switches tracing off, `h` halts, and
any other character goes on to the next instruction. A `BP` instruction
switches tracing on. Division by zero, a stack overflow or failed input
ends the run with a `Runtime error:` message.

Build a word index of a passage:

```
kplwords [stop_words_file] [passage_file]
```

The files default to `stopw.txt` and `vanban.txt` in the current
directory. Words holding a digit are skipped, the rest are lower-cased and
stripped of non-letters at both ends, and stop words are left out. Each
output line holds a word, the number of times it occurs and the lines it
occurs on, in alphabetical order.

## Using it from Python

Assembling and running a stack-machine program:

```python
import io

from kplkit.assembler import assemble
from kplkit.vm import VirtualMachine

code = assemble("INT 4\nLC 6\nLC 7\nML\nWRI\nWLN\nHL\n", 100)
out = io.StringIO()
vm = VirtualMachine(code, 2048, io.StringIO(), out, False)
status = vm.run()          # ProgramStatus.NORMAL_EXIT
print(out.getvalue())      # 42
```

Building a symbol table and generating code for it:

```python
from kplkit.codegen import CodeGenerator
from kplkit.debug import format_scope
from kplkit.symtab import SymbolTable, VariableSymbol, int_type

table = SymbolTable()
program = table.create_program("DEMO")
table.enter_block(program.scope)
x = VariableSymbol("X", int_type())
table.declare(x)
print(format_scope(program.scope))   # Var X : Int at offset 4

gen = CodeGenerator(table, 10000)
gen.gen_variable_value(x)
print(gen.listing())                 # 0:  LV 0,4
gen.serialize("demo.bin")
```

## What it does not do

The package does not read KPL source programs. There is no scanner that
turns source text into tokens, no parser, no semantic checks and no
command that compiles a KPL program: the token types, character classes
and the character reader are provided, and code is generated by driving
`CodeGenerator` and `SymbolTable` from Python. Executables come from
`CodeGenerator.serialize()`, `CodeBlock.save()` or the `smc` assembler.