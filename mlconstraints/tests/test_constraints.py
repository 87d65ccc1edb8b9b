import pytest

from mlconstraints import parsing
from mlconstraints.semantics import annotation
from mlconstraints.semantics import std_env
from mlconstraints.semantics.constraint import Constraint, collect_constraints
from mlconstraints.semantics.typ import Var, Int, Bool, Fn
from mlconstraints.semantics.typed import (
    TypedTerm,
    Integer,
    Identifier,
    FunctionApplication,
    FunctionDefinition,
    IfExpression,
    LetExpression,
)


def annotate(src):
    return annotation.annotate(parsing.parse(src))


def constraints_of(src):
    return collect_constraints(annotate(src))


def test_collect_constraints_for_identifier():
    assert constraints_of("x") == []


def test_collect_constraints_for_integer():
    assert constraints_of("42") == [
        # type(42) === integer
        Constraint(Var(1), Int),
    ]


def test_collect_constraints_for_if_expression():
    assert constraints_of("if x then 1 else 0") == [
        # type(if x then 1 else 0) === type(1)
        Constraint(Var(1), Var(3)),
        # type(if x then 1 else 0) === type(0)
        Constraint(Var(1), Var(4)),
        # type(x) === boolean
        Constraint(Var(2), Bool),
        # type(1) === type(0)
        Constraint(Var(3), Var(4)),
        # type(1) === integer
        Constraint(Var(3), Int),
        # type(0) === integer
        Constraint(Var(4), Int),
    ]


def test_collect_constraints_for_function_definition():
    assert constraints_of("fn x => x") == [
        # type(fn x => x) === type(x) -> type(x)
        Constraint(Var(1), Fn(Var(2), Var(2))),
    ]


def test_collect_constraints_for_function_application():
    assert constraints_of("inc x") == [
        # type(inc) === type(x) -> type(inc x)
        Constraint(Var(2), Fn(Var(3), Var(1))),
    ]


def test_collect_constraints_for_function_definition_with_function_application():
    assert constraints_of("fn x => x + 1") == [
        # type(fn x => x + 1) === type(x) -> type(x + 1)
        Constraint(Var(1), Fn(Var(2), Var(3))),
        # type(+ x) === type(1) -> type(+ x 1)
        Constraint(Var(4), Fn(Var(6), Var(3))),
        # type(+) === type(x) -> type(+ x)
        Constraint(Var(5), Fn(Var(2), Var(4))),
        # type(+) === int -> int
        Constraint(Var(5), Fn(Int, Int)),
        # type(1) === integer
        Constraint(Var(6), Int),
    ]


LET_INC = "let val inc = fn x => x + 1 in inc 42 end"


def test_collect_constraints_for_let_expression():
    assert constraints_of(LET_INC) == [
        # type(let...end) === type(inc 42)
        Constraint(Var(1), Var(9)),
        # type(inc) === type(fn x => x + 1)
        Constraint(Var(2), Var(3)),
        # type(fn x => x + 1) === type(x) -> type(+ x 1)
        Constraint(Var(3), Fn(Var(4), Var(5))),
        # type(+ x) === type(1) -> type(+ x 1)
        Constraint(Var(6), Fn(Var(8), Var(5))),
        # type(+) === type(x) -> type(+ x)
        Constraint(Var(7), Fn(Var(4), Var(6))),
        # type(+) === int -> int
        Constraint(Var(7), Fn(Int, Int)),
        # type(1) === integer
        Constraint(Var(8), Int),
        # type(inc) === type(42) -> type(inc 42)
        Constraint(Var(10), Fn(Var(11), Var(9))),
        # type(inc) === type(inc)
        Constraint(Var(10), Var(2)),
        # type(42) === integer
        Constraint(Var(11), Int),
    ]


def test_let_bound_use_is_equated_with_declaration_exactly_once():
    constraints = constraints_of(LET_INC)
    linking = [c for c in constraints if {c.type1, c.type2} == {Var(10), Var(2)}]
    assert linking == [Constraint(Var(10), Var(2))]


def test_let_value_cannot_see_its_own_name():
    assert constraints_of("let val x = x in x end") == [
        Constraint(Var(1), Var(4)),
        Constraint(Var(2), Var(3)),
        # Only the body's `x` is looked up.
        Constraint(Var(4), Var(2)),
    ]


def test_parameter_does_not_hide_let_binding_from_lookup():
    # The parameter never enters the bindings, so the body's `y` is still
    # equated with the outer let-bound `y`.
    assert constraints_of("let val y = 1 in fn y => y end") == [
        Constraint(Var(1), Var(4)),
        Constraint(Var(2), Var(3)),
        Constraint(Var(3), Int),
        Constraint(Var(4), Fn(Var(5), Var(5))),
        Constraint(Var(5), Var(2)),
    ]


def test_equality_operator_is_typed_like_arithmetic():
    assert constraints_of("x = 1") == [
        Constraint(Var(2), Fn(Var(5), Var(1))),
        Constraint(Var(3), Fn(Var(4), Var(2))),
        Constraint(Var(3), Fn(Int, Int)),
        Constraint(Var(5), Int),
    ]


@pytest.mark.parametrize("op", ["+", "-", "*", "/", "="])
def test_builtin_operators(op):
    term = TypedTerm(Var(1), Identifier(op))
    assert collect_constraints(term) == [Constraint(Var(1), Fn(Int, Int))]


def test_unknown_operator_is_unbound():
    assert collect_constraints(TypedTerm(Var(1), Identifier("%"))) == []


def test_malformed_let_binds_nothing():
    term = TypedTerm(Var(1), LetExpression(
        TypedTerm(Var(2), Integer(0)),
        TypedTerm(Var(3), Integer(1)),
        TypedTerm(Var(4), Identifier("z")),
    ))
    assert collect_constraints(term) == [
        Constraint(Var(1), Var(4)),
        Constraint(Var(2), Var(3)),
        Constraint(Var(3), Int),
    ]


def test_if_expression_has_four_own_constraints():
    term = annotate("if c then fn x => x else fn y => y 1")
    constraints = collect_constraints(term)
    own = [c for c in constraints if c.origin is term]
    assert len(own) == 4
    assert constraints[:4] == own


def test_application_has_one_own_constraint():
    term = annotate("f (g 1)")
    own = [c for c in collect_constraints(term) if c.origin is term]
    assert own == [Constraint(Var(2), Fn(Var(3), Var(1)))]


def test_origin_is_not_part_of_equality():
    origin = TypedTerm(Var(1), Integer(1))
    assert Constraint(Var(1), Int, origin) == Constraint(Var(1), Int)
    assert hash(Constraint(Var(1), Int, origin)) == hash(Constraint(Var(1), Int))


def test_constraint_order_matters_for_equality():
    assert Constraint(Var(1), Int) != Constraint(Int, Var(1))


def test_constraint_str():
    assert str(Constraint(Var(1), Fn(Var(2), Int))) == "t1 = (t2 → int)"


def test_deterministic():
    src = "let val f = fn a => if a then 1 else 2 in f (g 3) end"
    assert constraints_of(src) == constraints_of(src)

    term = annotate(src)
    assert collect_constraints(term) == collect_constraints(term)


@pytest.mark.parametrize("src", [
    "x",
    "42",
    "f x y",
    "fn x => fn y => x y",
    "if a then b else c",
    "let val a = 1 in let val b = a in a + b end end",
    "(fn x => x) (fn y => y)",
])
def test_always_returns_a_list(src):
    assert isinstance(constraints_of(src), list)


def test_let_binding_does_not_leak_between_calls():
    collect_constraints(annotate(LET_INC))
    assert collect_constraints(TypedTerm(Var(1), Identifier("inc"))) == []
    assert std_env.std_env().as_dict().keys() == {"+", "-", "*", "/", "="}


def test_bindings_are_not_mutated():
    bindings = std_env.std_env()
    before = bindings.as_dict()
    annotate(LET_INC).collect_constraints(bindings)
    assert bindings.as_dict() == before


def test_custom_bindings_are_used_for_lookup():
    bindings = std_env.std_env().extend("flag", Int)
    term = TypedTerm(Var(1), IfExpression(
        TypedTerm(Var(2), Identifier("flag")),
        TypedTerm(Var(3), Integer(1)),
        TypedTerm(Var(4), Integer(0)),
    ))
    constraints = term.collect_constraints(bindings)
    assert Constraint(Var(2), Int) in constraints
    assert Constraint(Var(2), Bool) in constraints


def test_function_definition_recurses_into_body_only():
    term = TypedTerm(Var(1), FunctionDefinition(
        TypedTerm(Var(2), Identifier("+")),
        TypedTerm(Var(3), FunctionApplication(
            TypedTerm(Var(4), Identifier("k")),
            TypedTerm(Var(5), Integer(7)),
        )),
    ))
    assert collect_constraints(term) == [
        Constraint(Var(1), Fn(Var(2), Var(3))),
        Constraint(Var(4), Fn(Var(5), Var(3))),
        Constraint(Var(5), Int),
    ]
