from typing import Optional, TYPE_CHECKING

from mlconstraints.log import logger
from mlconstraints.semantics import typ
from mlconstraints.semantics.disjoint_set import DisjointSet

if TYPE_CHECKING:
    from mlconstraints.semantics.constraint import Constraint


class UnificationError(Exception):
    def __init__(self, msg, constraint: Optional["Constraint"] = None):
        super().__init__(msg)
        self.msg = msg
        self.constraint = constraint


class RecursiveUnificationError(UnificationError):
    pass


class UnifierSet(DisjointSet[typ.Type]):
    """
    The substitution built up by unification. Each set holds types that have
    been unified; when a set contains something other than a `Var`, that type
    is the set's root.
    """

    def occurs_in_type(self, v: typ.Var, t: typ.Type) -> bool:
        if type(t) is typ.Var:
            t = self.root_of(t)
        if t == v:
            return True
        elif isinstance(t, typ.Poly):
            return any(self.occurs_in_type(v, x) for x in t.vals)
        else:
            return False

    def unify(self, t1: typ.Type, t2: typ.Type) -> None:
        r1 = self.root_of(t1)
        r2 = self.root_of(t2)
        logger.debug("(%s) ~ (%s)", r1, r2)

        if r1 == r2:
            return  # Already unified.

        elif type(r1) is typ.Var or type(r2) is typ.Var:
            var, other = (r1, r2) if type(r1) is typ.Var else (r2, r1)
            if self.occurs_in_type(var, other):
                logger.fatal("Circularity detected in (%s) ~ (%s)", var, other)
                msg = f"Infinite type: {var} occurs in {self.concretize(other)}"
                raise RecursiveUnificationError(msg)
            self.join_roots(r1, r2)

        elif type(r1) is type(r2) and len(r1.vals) == len(r2.vals):
            for x, y in zip(r1.vals, r2.vals):
                self.unify(x, y)

        else:
            left, right = self.concretize(r1), self.concretize(r2)
            logger.fatal("Cannot unify: (%s) ~ (%s)", left, right)
            raise UnificationError(f"Type mismatch: {left} != {right}")

    def join_roots(self, r1: typ.Type, r2: typ.Type) -> None:
        size1, size2 = self.map[r1], self.map[r2]

        if type(r1) is typ.Var and type(r2) is not typ.Var:
            # `r2` is something concrete, make it the root.
            self.map[r2] += size1
            self.map[r1] = r2
        elif type(r2) is typ.Var and type(r1) is not typ.Var:
            # `r1` is something concrete, make it the root.
            self.map[r1] += size2
            self.map[r2] = r1
        else:
            super().join_roots(r1, r2)

    def concretize(self, t: typ.Type) -> typ.Type:
        """
        Recursively builds up a type by replacing all known `Var`s with the
        concrete types they refer to.

        Ex:
            If T has been unified with Int:
                self.concretize(T) -> Int
                self.concretize(Fn(T, T)) -> Fn(Int, Int)
        """
        if type(t) is typ.Var:
            r = self.root_of(t)
            return r if r == t else self.concretize(r)
        elif isinstance(t, typ.Poly) and t.vals:
            cls = type(t)
            vals = (self.concretize(v) for v in t.vals)
            return cls(*vals)
        else:
            return t
