"""Symbol table of the KPL compiler: types, constants, scopes and declared symbols."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import ClassVar

from .instructions import CHAR_SIZE, DC_VALUE, INT_SIZE

# Words at the start of every frame: return value, dynamic link,
# return address and static link.
RESERVED_WORDS = 4


class TypeClass(Enum):
    """Class of a KPL type."""

    INT = auto()
    CHAR = auto()
    ARRAY = auto()


class ObjectKind(Enum):
    """Kind of a declared symbol."""

    CONSTANT = auto()
    VARIABLE = auto()
    TYPE = auto()
    FUNCTION = auto()
    PROCEDURE = auto()
    PARAMETER = auto()
    PROGRAM = auto()


class ParamKind(Enum):
    """How a parameter is passed."""

    VALUE = auto()
    REFERENCE = auto()


@dataclass(frozen=True)
class Type:
    """A KPL type; two types are equal when they have the same structure."""

    type_class: TypeClass
    array_size: int = 0
    element_type: Type | None = None

    def size(self) -> int:
        """Return the number of stack words a value of this type occupies."""
        if self.type_class is TypeClass.INT:
            return INT_SIZE
        if self.type_class is TypeClass.CHAR:
            return CHAR_SIZE
        if self.element_type is None:
            raise ValueError("array type without an element type")
        return self.array_size * self.element_type.size()


def int_type() -> Type:
    """Return the integer type."""
    return Type(TypeClass.INT)


def char_type() -> Type:
    """Return the character type."""
    return Type(TypeClass.CHAR)


def array_type(size: int, element_type: Type) -> Type:
    """Return an array type of ``size`` elements of ``element_type``."""
    return Type(TypeClass.ARRAY, size, element_type)


@dataclass(frozen=True)
class ConstantValue:
    """A constant: an ``int`` for integer constants, a one-character ``str`` for chars."""

    type_class: TypeClass
    value: int | str


@dataclass(eq=False)
class Scope:
    """The symbols declared in one block and the size of its frame."""

    owner: Symbol | None = field(repr=False)
    outer: Scope | None = field(default=None, repr=False)
    objects: list[Symbol] = field(default_factory=list)
    frame_size: int = RESERVED_WORDS

    def find(self, name: str) -> Symbol | None:
        """Return the symbol declared here under ``name``, or None."""
        return next((obj for obj in self.objects if obj.name == name), None)


@dataclass(eq=False)
class Symbol:
    """Base of every declared symbol."""

    name: str
    kind: ClassVar[ObjectKind]


@dataclass(eq=False)
class ConstantSymbol(Symbol):
    kind = ObjectKind.CONSTANT
    value: ConstantValue | None = None


@dataclass(eq=False)
class TypeSymbol(Symbol):
    kind = ObjectKind.TYPE
    actual_type: Type | None = None


@dataclass(eq=False)
class VariableSymbol(Symbol):
    kind = ObjectKind.VARIABLE
    type: Type | None = None
    scope: Scope | None = field(default=None, repr=False)
    offset: int = 0


@dataclass(eq=False)
class ParameterSymbol(Symbol):
    kind = ObjectKind.PARAMETER
    param_kind: ParamKind = ParamKind.VALUE
    type: Type | None = None
    scope: Scope | None = field(default=None, repr=False)
    offset: int = 0


@dataclass(eq=False)
class FunctionSymbol(Symbol):
    kind = ObjectKind.FUNCTION
    return_type: Type | None = None
    params: list[ParameterSymbol] = field(default_factory=list, repr=False)
    code_address: int = DC_VALUE
    scope: Scope = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.scope = Scope(self)

    @property
    def param_count(self) -> int:
        return len(self.params)


@dataclass(eq=False)
class ProcedureSymbol(Symbol):
    kind = ObjectKind.PROCEDURE
    params: list[ParameterSymbol] = field(default_factory=list, repr=False)
    code_address: int = DC_VALUE
    scope: Scope = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.scope = Scope(self)

    @property
    def param_count(self) -> int:
        return len(self.params)


@dataclass(eq=False)
class ProgramSymbol(Symbol):
    kind = ObjectKind.PROGRAM
    code_address: int = DC_VALUE
    scope: Scope = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.scope = Scope(self)


class SymbolTable:
    """Nested scopes of a program plus the predefined global subprograms."""

    def __init__(self) -> None:
        self.program: ProgramSymbol | None = None
        self.current_scope: Scope | None = None
        self.global_objects: list[Symbol] = []

        self.readc_function = FunctionSymbol("READC", return_type=char_type())
        self.declare(self.readc_function)
        self.readi_function = FunctionSymbol("READI", return_type=int_type())
        self.declare(self.readi_function)

        self.writei_procedure = ProcedureSymbol("WRITEI")
        self.declare(self.writei_procedure)
        self.enter_block(self.writei_procedure.scope)
        self.declare(ParameterSymbol("i", ParamKind.VALUE, int_type()))
        self.exit_block()

        self.writec_procedure = ProcedureSymbol("WRITEC")
        self.declare(self.writec_procedure)
        self.enter_block(self.writec_procedure.scope)
        self.declare(ParameterSymbol("ch", ParamKind.VALUE, char_type()))
        self.exit_block()

        self.writeln_procedure = ProcedureSymbol("WRITELN")
        self.declare(self.writeln_procedure)

        self.int_type = int_type()
        self.char_type = char_type()

    def create_program(self, name: str) -> ProgramSymbol:
        """Create the program symbol and make it the table's program."""
        self.program = ProgramSymbol(name)
        return self.program

    def enter_block(self, scope: Scope) -> None:
        """Make ``scope`` the current scope."""
        self.current_scope = scope

    def exit_block(self) -> None:
        """Return to the scope enclosing the current one."""
        if self.current_scope is None:
            raise RuntimeError("no block to exit")
        self.current_scope = self.current_scope.outer

    def declare(self, symbol: Symbol) -> None:
        """Add ``symbol`` to the current scope, or to the globals outside any block.

        Variables and parameters get their frame offset; parameters are also
        added to the parameter list of the scope's owner.
        """
        scope = self.current_scope
        if scope is None:
            self.global_objects.append(symbol)
            return
        if isinstance(symbol, VariableSymbol):
            if symbol.type is None:
                raise ValueError(f"variable {symbol.name} has no type")
            symbol.scope = scope
            symbol.offset = scope.frame_size
            scope.frame_size += symbol.type.size()
        elif isinstance(symbol, ParameterSymbol):
            symbol.scope = scope
            symbol.offset = scope.frame_size
            scope.frame_size += 1
            owner = scope.owner
            if isinstance(owner, (FunctionSymbol, ProcedureSymbol)):
                owner.params.append(symbol)
        elif isinstance(symbol, (FunctionSymbol, ProcedureSymbol)):
            symbol.scope.outer = scope
        scope.objects.append(symbol)

    def lookup(self, name: str) -> Symbol | None:
        """Find ``name`` in the current scope, its enclosing scopes, then the globals."""
        scope = self.current_scope
        while scope is not None:
            found = scope.find(name)
            if found is not None:
                return found
            scope = scope.outer
        return next((obj for obj in self.global_objects if obj.name == name), None)