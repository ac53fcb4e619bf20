"""Tests for the tree-walking interpreter."""

import math

import pytest

from tests.utils import evaluate, interpret, parse_text
from ast_nodes import ForStatementNode, LiteralNode
from interpreter import Interpreter, ToyFunction, is_truthy, stringify, values_equal
from main import run_source
from errors import (
    ArityError,
    DivisionByZeroError,
    DuplicateDefinitionError,
    InternalError,
    NotCallableError,
    StackOverflowError,
    TypeMismatchError,
    UndefinedVariableError,
)


@pytest.mark.parametrize(
    "src, expected",
    [
        ("3 + 2 * 4;", 11.0),
        ("3 + 2 > 4;", True),
        ("3 + 2 == 5;", True),
        ("3 + 2 == 4;", False),
        ("-2 + 3;", 1.0),
        ("var a = 1; a + 1;", 2.0),
        ("10 / 4;", 2.5),
        ("7 - 2 - 1;", 4.0),
        ("2 >= 2;", True),
        ("2 <= 1;", False),
        ("1 != 2;", True),
        ("3 > 2 == 4;", False),
        ("3 > 2 == true;", True),
        ("true == 1;", False),
        ("false == 0;", False),
        ("null == null;", True),
        ("null == 0;", False),
        ("null != false;", True),
        ("!0;", True),
        ("!1;", False),
        ("!null;", True),
        ("!!true;", True),
        ("-(1 + 2);", -3.0),
    ],
)
def test_evaluate_expressions(src, expected):
    result = evaluate(src)
    assert result == expected
    assert type(result) is type(expected)


@pytest.mark.parametrize("src", ["1 + true;", "null * 2;", "1 < false;", "-true;", "-null;"])
def test_arithmetic_and_comparison_require_numbers(src):
    with pytest.raises(TypeMismatchError):
        evaluate(src)


@pytest.mark.parametrize("src", ["1 / 0;", "0 / 0;", "-5 / (2 - 2);"])
def test_division_by_zero_is_a_runtime_error(src):
    with pytest.raises(DivisionByZeroError):
        evaluate(src)


def test_equality_between_functions_is_identity():
    assert evaluate("fn f() {} fn g() {} f == f;") is True
    assert evaluate("fn f() {} fn g() {} f == g;") is False


def test_block_environment_scope():
    src = """
    var a = 1;
    var b = 2;
    {
        var a = 2;
        var c = 3;
        b = 10;
    }
    """
    interpreter, _ = interpret(src)
    assert interpreter.environment.get("a") == 1.0
    assert interpreter.environment.get("b") == 10.0
    with pytest.raises(UndefinedVariableError):
        interpreter.environment.get("c")


def test_duplicate_definition_in_same_scope():
    with pytest.raises(DuplicateDefinitionError):
        interpret("var a = 1; var a = 2;")


def test_assignment_to_undefined_variable():
    with pytest.raises(UndefinedVariableError):
        interpret("b = 1;")


def test_var_without_initializer_is_null():
    _, output = interpret("var a; print a;")
    assert output == ["null"]


def test_while_statement_prints_each_iteration():
    src = """
    var i = 0;
    while (i < 5) {
        print i;
        i = i + 1;
    }
    """
    _, output = interpret(src)
    assert output == ["0.0", "1.0", "2.0", "3.0", "4.0"]


def test_while_with_false_condition_never_runs():
    _, output = interpret("while (false) print 1;")
    assert output == []


def test_for_loop_runs_and_scopes_its_variable():
    interpreter, output = interpret("for (var i = 0; i < 5; i = i + 1) print i;")
    assert output == ["0.0", "1.0", "2.0", "3.0", "4.0"]
    with pytest.raises(UndefinedVariableError):
        interpreter.environment.get("i")


def test_if_else_uses_truthiness():
    _, output = interpret("if (0) print 1; else print 2; if (3) print 4;")
    assert output == ["2.0", "4.0"]


def test_print_renders_values():
    _, output = interpret("print 1; print 2.5; print true; print false; print null;")
    assert output == ["1.0", "2.5", "true", "false", "null"]


def test_print_renders_functions():
    _, output = interpret("fn f() {} print f;")
    assert output == ["<fn f>"]


def test_function_call_returns_value():
    _, output = interpret("fn add(a, b) { return a + b; } print add(1, 2);")
    assert output == ["3.0"]


def test_function_without_return_yields_null():
    _, output = interpret("fn f() { 1; } print f(); fn g() { return; } print g();")
    assert output == ["null", "null"]


def test_recursion():
    src = """
    fn fib(n) {
        if (n < 2) return n;
        return fib(n - 1) + fib(n - 2);
    }
    print fib(10);
    """
    _, output = interpret(src)
    assert output == ["55.0"]


COUNTDOWN = "fn down(n) { if (n == 0) return 0; return down(n - 1); }"


def test_moderately_deep_recursion():
    _, output = interpret(COUNTDOWN + " print down(200);")
    assert output == ["0.0"]


def test_runaway_recursion_is_a_runtime_error():
    interpreter = Interpreter(printer=lambda _: None)
    interpreter.interpret(parse_text(COUNTDOWN))
    with pytest.raises(StackOverflowError, match="Maximum call depth exceeded"):
        interpreter.interpret(parse_text("down(100000);"))
    assert interpreter.environment is interpreter.globals
    interpreter.interpret(parse_text("var after = down(3);"))
    assert interpreter.globals.get("after") == 0.0


def test_return_unwinds_nested_blocks_and_loops():
    src = """
    fn find() {
        var i = 0;
        while (true) {
            {
                if (i == 3) { return i; }
            }
            i = i + 1;
        }
    }
    print find();
    """
    interpreter, output = interpret(src)
    assert output == ["3.0"]
    assert interpreter.environment is interpreter.globals


def test_return_from_for_loop():
    src = """
    fn first_over(limit) {
        for (var i = 0; ; i = i + 1) {
            if (i * i > limit) return i;
        }
    }
    print first_over(50);
    """
    _, output = interpret(src)
    assert output == ["8.0"]


def test_closures_share_captured_variable():
    src = """
    var count = 0;
    fn inc() { count = count + 1; return count; }
    inc();
    inc();
    print count;
    """
    _, output = interpret(src)
    assert output == ["2.0"]


def test_counter_closures_are_independent():
    src = """
    fn make_counter() {
        var c = 0;
        fn next() { c = c + 1; return c; }
        return next;
    }
    var a = make_counter();
    var b = make_counter();
    print a();
    print a();
    print b();
    """
    _, output = interpret(src)
    assert output == ["1.0", "2.0", "1.0"]


def test_function_sees_later_global_assignments():
    src = """
    var x = 1;
    fn show() { print x; }
    x = 2;
    show();
    """
    _, output = interpret(src)
    assert output == ["2.0"]


def test_parameters_shadow_outer_variables():
    src = """
    var a = 1;
    fn f(a) { a = a + 10; return a; }
    print f(5);
    print a;
    """
    _, output = interpret(src)
    assert output == ["15.0", "1.0"]


def test_arguments_are_evaluated_left_to_right():
    src = """
    var log = 0;
    fn pair(a, b) { return a * 10 + b; }
    print pair(log = log + 1, log = log + 1);
    """
    _, output = interpret(src)
    assert output == ["12.0"]


def test_calling_a_non_function():
    with pytest.raises(NotCallableError):
        interpret("var a = 1; a();")


@pytest.mark.parametrize("call", ["f();", "f(1, 2);"])
def test_arity_mismatch(call):
    with pytest.raises(ArityError):
        interpret("fn f(a) { return a; } " + call)


def test_top_level_return_stops_the_program():
    _, output = interpret("print 1; return 5; print 2;")
    assert output == ["1.0"]


def test_error_inside_block_restores_environment():
    interpreter = Interpreter(printer=lambda _: None)
    with pytest.raises(UndefinedVariableError):
        interpreter.interpret(parse_text("fn f() { { var x = 1; missing; } } f();"))
    assert interpreter.environment is interpreter.globals


def test_interpreter_keeps_globals_between_runs():
    output = []
    interpreter = run_source("var a = 1;", printer=output.append)
    run_source("a = a + 1; print a;", interpreter)
    assert output == ["2.0"]


def test_for_node_at_runtime_is_an_internal_error():
    with pytest.raises(InternalError):
        Interpreter().execute(ForStatementNode(condition=LiteralNode(value=True)))


def test_function_value_is_defined_in_current_scope():
    interpreter, _ = interpret("fn f(a, b) {}")
    fn = interpreter.globals.get("f")
    assert isinstance(fn, ToyFunction)
    assert fn.arity == 2
    assert fn.closure.enclosing is interpreter.globals


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, False),
        (True, True),
        (False, False),
        (0.0, False),
        (-0.0, False),
        (0.1, True),
        ("", False),
        ("text", True),
        (object(), True),
    ],
)
def test_truthiness(value, expected):
    assert is_truthy(value) is expected


def test_values_equal_keeps_booleans_apart_from_numbers():
    assert values_equal(1.0, 1.0)
    assert not values_equal(True, 1.0)
    assert not values_equal(0.0, False)
    assert values_equal(None, None)


def test_stringify_special_floats():
    assert stringify(math.inf) == "Infinity"
    assert stringify(-math.inf) == "-Infinity"
    assert stringify(math.nan) == "NaN"
    assert stringify(3.0) == "3.0"


@pytest.mark.parametrize(
    "value, expected",
    [
        (1e16, "10000000000000000.0"),
        (1e-05, "0.00001"),
        (-2.5e-07, "-0.00000025"),
        (1.5e20, "150000000000000000000.0"),
        (2.5, "2.5"),
        (-3.0, "-3.0"),
        (0.0, "0.0"),
    ],
)
def test_stringify_never_uses_exponent_notation(value, expected):
    assert stringify(value) == expected


def test_print_large_and_small_numbers():
    _, output = interpret("print 10000000000000000; print 0.00001;")
    assert output == ["10000000000000000.0", "0.00001"]
