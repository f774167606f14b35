"""Symbol table, code generator, assembler and stack-machine interpreter for KPL."""

__version__ = "0.1.0"