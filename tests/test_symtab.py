import pytest

from kplkit.instructions import CHAR_SIZE, INT_SIZE
from kplkit.symtab import (
    RESERVED_WORDS,
    ConstantSymbol,
    FunctionSymbol,
    ObjectKind,
    ParameterSymbol,
    ParamKind,
    ProcedureSymbol,
    Scope,
    SymbolTable,
    TypeClass,
    VariableSymbol,
    array_type,
    char_type,
    int_type,
)


def test_basic_type_sizes():
    assert int_type().size() == INT_SIZE
    assert char_type().size() == CHAR_SIZE


def test_array_size_is_count_times_element_size():
    inner = array_type(3, int_type())
    outer = array_type(5, inner)
    assert outer.size() == 5 * inner.size()
    assert inner.size() == 3 * INT_SIZE


def test_type_equality_is_structural():
    assert array_type(3, int_type()) == array_type(3, int_type())
    assert array_type(3, int_type()) != array_type(4, int_type())
    assert array_type(3, int_type()) != array_type(3, char_type())
    assert int_type() != char_type()


def test_type_classes():
    assert int_type().type_class is TypeClass.INT
    assert array_type(2, char_type()).element_type == char_type()


def test_predefined_globals():
    st = SymbolTable()
    names = [obj.name for obj in st.global_objects]
    assert names == ["READC", "READI", "WRITEI", "WRITEC", "WRITELN"]
    assert st.readc_function.return_type == char_type()
    assert st.readi_function.return_type == int_type()
    assert st.writei_procedure.param_count == 1
    assert st.writei_procedure.params[0].type == int_type()
    assert st.writec_procedure.params[0].name == "ch"
    assert st.writeln_procedure.param_count == 0
    assert st.current_scope is None


def test_variable_offsets_follow_frame():
    st = SymbolTable()
    prog = st.create_program("DEMO")
    assert st.program is prog
    st.enter_block(prog.scope)
    a = VariableSymbol("A", type=int_type())
    b = VariableSymbol("B", type=array_type(3, int_type()))
    c = VariableSymbol("C", type=char_type())
    for v in (a, b, c):
        st.declare(v)
    assert a.offset == RESERVED_WORDS
    assert b.offset == a.offset + a.type.size()
    assert c.offset == b.offset + b.type.size()
    assert prog.scope.frame_size == c.offset + c.type.size()
    assert a.scope is prog.scope


def test_variable_without_type_rejected():
    st = SymbolTable()
    st.enter_block(st.create_program("P").scope)
    with pytest.raises(ValueError):
        st.declare(VariableSymbol("X"))


def test_parameters_join_owner_list():
    st = SymbolTable()
    prog = st.create_program("P")
    st.enter_block(prog.scope)
    func = FunctionSymbol("F", return_type=int_type())
    st.declare(func)
    assert func.scope.outer is prog.scope
    st.enter_block(func.scope)
    p1 = ParameterSymbol("X", ParamKind.VALUE, int_type())
    p2 = ParameterSymbol("Y", ParamKind.REFERENCE, array_type(4, int_type()))
    st.declare(p1)
    st.declare(p2)
    assert func.params == [p1, p2]
    assert func.param_count == 2
    assert p2.offset == p1.offset + 1
    assert func.scope.frame_size == p2.offset + 1
    st.exit_block()
    assert st.current_scope is prog.scope


def test_lookup_walks_outward_then_globals():
    st = SymbolTable()
    prog = st.create_program("P")
    st.enter_block(prog.scope)
    outer_x = VariableSymbol("X", type=int_type())
    st.declare(outer_x)
    proc = ProcedureSymbol("Q")
    st.declare(proc)
    st.enter_block(proc.scope)
    inner_x = VariableSymbol("X", type=char_type())
    st.declare(inner_x)
    assert st.lookup("X") is inner_x
    assert st.lookup("Q") is proc
    assert st.lookup("WRITEI") is st.writei_procedure
    assert st.lookup("NOPE") is None
    st.exit_block()
    assert st.lookup("X") is outer_x


def test_scope_find():
    scope = Scope(None)
    const = ConstantSymbol("K")
    scope.objects.append(const)
    assert scope.find("K") is const
    assert scope.find("k") is None
    assert const.kind is ObjectKind.CONSTANT


def test_exit_block_without_scope():
    st = SymbolTable()
    with pytest.raises(RuntimeError):
        st.exit_block()