"""Code generation helpers of the KPL compiler."""

from __future__ import annotations

from .instructions import DC_VALUE, CodeBlock, Instruction, OpCode
from .symtab import (
    FunctionSymbol,
    ParameterSymbol,
    ProcedureSymbol,
    Scope,
    SymbolTable,
    VariableSymbol,
)

CODE_SIZE = 10000

RETURN_VALUE_OFFSET = 0
DYNAMIC_LINK_OFFSET = 1
RETURN_ADDRESS_OFFSET = 2
STATIC_LINK_OFFSET = 3


class CodeGenerator:
    """Emits stack-machine code for symbols of a :class:`SymbolTable`."""

    def __init__(self, symtab: SymbolTable, max_size: int = CODE_SIZE) -> None:
        self.symtab = symtab
        self.code = CodeBlock(max_size)

    def nested_level(self, scope: Scope | None) -> int:
        """Count the static links from the current scope out to ``scope``."""
        level = 0
        current = self.symtab.current_scope
        while current is not scope:
            if current is None:
                raise ValueError("scope does not enclose the current scope")
            current = current.outer
            level += 1
        return level

    def emit(self, op: OpCode, p: int = DC_VALUE, q: int = DC_VALUE) -> Instruction:
        """Append one instruction and return it."""
        return self.code.emit(op, p, q)

    def gen_variable_address(self, var: VariableSymbol) -> Instruction:
        return self.emit(OpCode.LA, self.nested_level(var.scope), var.offset)

    def gen_variable_value(self, var: VariableSymbol) -> Instruction:
        return self.emit(OpCode.LV, self.nested_level(var.scope), var.offset)

    def gen_parameter_address(self, param: ParameterSymbol) -> Instruction:
        return self.emit(OpCode.LA, self.nested_level(param.scope), param.offset)

    def gen_parameter_value(self, param: ParameterSymbol) -> Instruction:
        return self.emit(OpCode.LV, self.nested_level(param.scope), param.offset)

    def gen_return_value_address(self, func: FunctionSymbol) -> Instruction:
        return self.emit(OpCode.LA, self.nested_level(func.scope), RETURN_VALUE_OFFSET)

    def gen_return_value_value(self, func: FunctionSymbol) -> Instruction:
        return self.emit(OpCode.LV, self.nested_level(func.scope), RETURN_VALUE_OFFSET)

    def gen_predefined_procedure_call(self, proc: ProcedureSymbol) -> Instruction | None:
        """Emit the instruction of WRITEI, WRITEC or WRITELN; None for others."""
        st = self.symtab
        if proc is st.writei_procedure:
            return self.emit(OpCode.WRI)
        if proc is st.writec_procedure:
            return self.emit(OpCode.WRC)
        if proc is st.writeln_procedure:
            return self.emit(OpCode.WLN)
        return None

    def gen_procedure_call(self, proc: ProcedureSymbol) -> Instruction:
        return self.emit(OpCode.CALL, self.nested_level(proc.scope.outer), proc.code_address)

    def gen_predefined_function_call(self, func: FunctionSymbol) -> Instruction | None:
        """Emit the instruction of READI or READC; None for others."""
        if func is self.symtab.readi_function:
            return self.emit(OpCode.RI)
        if func is self.symtab.readc_function:
            return self.emit(OpCode.RC)
        return None

    def gen_function_call(self, func: FunctionSymbol) -> Instruction:
        return self.emit(OpCode.CALL, self.nested_level(func.scope.outer), func.code_address)

    def gen_jump(self, label: int) -> Instruction:
        """Emit an unconditional jump; the returned instruction may be patched later."""
        return self.emit(OpCode.J, q=label)

    def gen_false_jump(self, label: int) -> Instruction:
        """Emit a jump taken when the top of the stack is false."""
        return self.emit(OpCode.FJ, q=label)

    def update_jump(self, instruction: Instruction, label: int) -> None:
        """Set the target of an emitted jump."""
        instruction.q = label

    def current_address(self) -> int:
        """Return the address the next instruction will get."""
        return len(self.code)

    def is_predefined_function(self, func: object) -> bool:
        st = self.symtab
        return func is st.readi_function or func is st.readc_function

    def is_predefined_procedure(self, proc: object) -> bool:
        st = self.symtab
        return (
            proc is st.writei_procedure
            or proc is st.writec_procedure
            or proc is st.writeln_procedure
        )

    def listing(self) -> str:
        """Return the numbered listing of the generated code."""
        return self.code.listing()

    def serialize(self, path: str) -> None:
        """Write the generated code to ``path``; raises ``OSError`` on failure."""
        with open(path, "wb") as f:
            self.code.save(f)