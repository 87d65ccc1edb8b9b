from mlconstraints.semantics import env
from mlconstraints.semantics import typ

OPERATORS = ("+", "-", "*", "/", "=")


def std_env() -> env.Env[str, typ.Type]:
    # `=` is typed like the arithmetic operators, int -> int.
    return env.Env(locals={
        op: typ.Fn(typ.Int, typ.Int) for op in OPERATORS
    })
