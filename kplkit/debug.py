"""Text dumps of types, constants, symbols and scopes for debugging."""

from __future__ import annotations

from .symtab import (
    ConstantSymbol,
    ConstantValue,
    FunctionSymbol,
    ParameterSymbol,
    ParamKind,
    ProcedureSymbol,
    ProgramSymbol,
    Scope,
    Symbol,
    Type,
    TypeClass,
    TypeSymbol,
    VariableSymbol,
)


def format_type(type_: Type) -> str:
    """Return ``Int``, ``Char`` or ``Arr(size,element)``."""
    if type_.type_class is TypeClass.INT:
        return "Int"
    if type_.type_class is TypeClass.CHAR:
        return "Char"
    return f"Arr({type_.array_size},{format_type(type_.element_type)})"


def format_constant(value: ConstantValue) -> str:
    """Return an integer constant as digits and a char constant in quotes."""
    if value.type_class is TypeClass.INT:
        return str(value.value)
    if value.type_class is TypeClass.CHAR:
        return f"'{value.value}'"
    return ""


def format_symbol(symbol: Symbol, indent: int = 0) -> str:
    """Return one symbol, with the nested scope of subprograms and programs."""
    pad = " " * indent
    if isinstance(symbol, ConstantSymbol):
        return f"{pad}Const {symbol.name} = {format_constant(symbol.value)}"
    if isinstance(symbol, TypeSymbol):
        return f"{pad}Type {symbol.name} = {format_type(symbol.actual_type)}"
    if isinstance(symbol, VariableSymbol):
        return f"{pad}Var {symbol.name} : {format_type(symbol.type)} at offset {symbol.offset}"
    if isinstance(symbol, ParameterSymbol):
        head = "Param" if symbol.param_kind is ParamKind.VALUE else "Param VAR"
        return (
            f"{pad}{head} {symbol.name} : {format_type(symbol.type)}"
            f" at offset {symbol.offset}"
        )
    if isinstance(symbol, FunctionSymbol):
        return (
            f"{pad}Function {symbol.name} : {format_type(symbol.return_type)}"
            f" at address {symbol.code_address}\n"
            + format_scope(symbol.scope, indent + 4)
        )
    if isinstance(symbol, ProcedureSymbol):
        return (
            f"{pad}Procedure {symbol.name} at address {symbol.code_address}\n"
            + format_scope(symbol.scope, indent + 4)
        )
    if isinstance(symbol, ProgramSymbol):
        return (
            f"{pad}Program {symbol.name} at address {symbol.code_address}\n"
            + format_scope(symbol.scope, indent + 4)
        )
    return ""


def format_scope(scope: Scope, indent: int = 0) -> str:
    """Return every symbol of ``scope``, each followed by a line break."""
    return "".join(format_symbol(obj, indent) + "\n" for obj in scope.objects)