from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, TYPE_CHECKING

from mlconstraints.log import logger
from mlconstraints.semantics import env
from mlconstraints.semantics import std_env
from mlconstraints.semantics import typ

if TYPE_CHECKING:
    from mlconstraints.semantics import typed

Bindings = env.Env[str, typ.Type]


@dataclass(frozen=True)
class Constraint:
    """
    An obligation that `type1` and `type2` denote the same type once the
    constraints are solved. `origin` is the term whose rule emitted the
    constraint; it is for diagnostics only and takes no part in equality.
    """
    type1: typ.Type
    type2: typ.Type
    origin: Optional[typed.TypedTerm] = field(default=None, compare=False, repr=False)

    def __str__(self):
        return f"{self.type1} = {self.type2}"


def collect_constraints(term: typed.TypedTerm) -> List[Constraint]:
    """
    Walks a fully annotated term and returns the type equations it implies,
    in traversal order. Every call starts from a fresh copy of the built-in
    operator bindings.
    """
    constraints = term.collect_constraints(std_env.std_env())
    logger.debug(
        "collected %d constraints: [%s]",
        len(constraints),
        ", ".join(str(c) for c in constraints),
    )
    return constraints
