from typing import Dict

from mlconstraints import utils
from mlconstraints.utils import instance
from mlconstraints.utils import unicode


class Type:
    def __eq__(self, other):
        return type(self) is type(other)

    def __hash__(self):
        return hash(self.__class__)


class Var(Type):
    """
    Represents a type variable. The `id` is minted by the annotator, and two
    variables denote the same type iff their ids are equal.
    t1, t2, t3
    """

    def __init__(self, id: int):
        self.id = id

    def __repr__(self):
        cls_name = self.__class__.__name__
        return f"{cls_name}({self.id!r})"

    def __str__(self):
        return f"t{self.id}"

    def __hash__(self):
        return hash((self.__class__, self.id))

    def __eq__(self, other):
        return super().__eq__(other) and self.id == other.id


class Poly(Type):
    JOIN = None
    SIZE = None
    NAME = None

    def __init__(self, *vals):
        if self.SIZE is not None and len(vals) != self.SIZE:
            cls_name = self.__class__.__name__
            msg = f"{cls_name} constructor takes exactly {self.SIZE} arguments, {len(vals)} given!"
            raise ValueError(msg)
        self.vals = vals

    def __repr__(self):
        if self.SIZE == 0:
            return self.__class__.__name__
        cls_name = self.__class__.__name__
        vals = ", ".join(repr(v) for v in self.vals)
        return f"{cls_name}({vals})"

    def __str__(self):
        if self.SIZE == 0:
            return self.NAME
        sep = f" {self.JOIN} " if self.JOIN is not None else ", "
        vals = sep.join(str(v) for v in self.vals)
        return f"({vals})"

    def __hash__(self):
        return hash((self.__class__, self.vals))

    def __eq__(self, other):
        return super().__eq__(other) and \
               len(self.vals) == len(other.vals) and \
               all(x == y for x, y in zip(self.vals, other.vals))


class Fn(Poly):
    JOIN = unicode.ARROW
    SIZE = 2

    @property
    def param(self) -> Type:
        return self.vals[0]

    @property
    def ret(self) -> Type:
        return self.vals[1]


@instance
class Int(Poly):
    SIZE = 0
    NAME = "int"


@instance
class Bool(Poly):
    SIZE = 0
    NAME = "bool"


def pretty(t: Type) -> str:
    """
    Renders a type for humans, renaming every type variable to a greek letter
    in order of first appearance.

    Ex:
        pretty(Fn(Var(7), Fn(Var(3), Var(7)))) -> "(α → (β → α))"
    """
    names: Dict[Var, str] = dict()
    stream = utils.fresh_greek_stream()

    def render(t: Type) -> str:
        if type(t) is Var:
            if t not in names:
                names[t] = next(stream)
            return names[t]
        elif isinstance(t, Poly) and t.SIZE != 0:
            sep = f" {t.JOIN} " if t.JOIN is not None else ", "
            return "(" + sep.join(render(v) for v in t.vals) + ")"
        else:
            return str(t)

    return render(t)
