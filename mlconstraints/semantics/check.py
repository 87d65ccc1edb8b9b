from typing import Iterable, List, Optional

from mlconstraints import parsing
from mlconstraints.log import logger
from mlconstraints.semantics import annotation
from mlconstraints.semantics import constraint
from mlconstraints.semantics import syntax
from mlconstraints.semantics import typ
from mlconstraints.semantics import typed
from mlconstraints.semantics import unifier_set


class Checker:
    """
    Runs a single program through annotation, constraint collection and
    unification. Type variable ids restart at 1 for every program, so a
    `Checker` should not be shared between programs.
    """

    def __init__(self):
        self.unifiers = unifier_set.UnifierSet()
        self.term: Optional[typed.TypedTerm] = None
        self.constraints: List[constraint.Constraint] = []

    def unify(self, t1: typ.Type, t2: typ.Type) -> None:
        self.unifiers.unify(t1, t2)

    def concretize(self, t: typ.Type) -> typ.Type:
        return self.unifiers.concretize(t)

    def solve(self, constraints: Iterable[constraint.Constraint]) -> None:
        """
        Unifies each constraint in order, stopping at the first failure. The
        failing constraint is attached to the raised error.
        """
        for c in constraints:
            try:
                self.unify(c.type1, c.type2)
            except unifier_set.UnificationError as err:
                err.constraint = c
                raise
        logger.debug("substitution: %r", self.unifiers)

    def infer_type(self, tree: syntax.AstNode) -> typ.Type:
        self.term = annotation.annotate(tree)
        self.constraints = constraint.collect_constraints(self.term)
        self.solve(self.constraints)
        return self.concretize(self.term.type)


def infer_source(src_text: str) -> typ.Type:
    checker = Checker()
    return checker.infer_type(parsing.parse(src_text))
