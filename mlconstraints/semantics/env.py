from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Dict, TypeVar, Generic, Mapping

K = TypeVar("K")
V = TypeVar("V")
MISSING = object()


class EnvKeyError(Exception):
    def __init__(self, key):
        self.key = key


@dataclass(frozen=True)
class Env(Generic[K, V]):
    """
    A persistent scope chain. Extending an `Env` never changes it, so a
    sibling scope holding the parent never sees the child's bindings.

    Example:
    >>> outer = Env(locals={"x": 1})
    >>> inner = outer.extend("y", 2)
    >>> inner["x"], inner["y"]
    (1, 2)
    >>> "y" in outer
    False
    """
    locals: Mapping[K, V] = field(default_factory=dict)
    parent: Optional[Env[K, V]] = None

    def extend(self, key: K, value: V) -> Env[K, V]:
        return Env(locals={key: value}, parent=self)

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        res = self.locals.get(key, MISSING)
        if res is not MISSING:
            return res
        elif self.parent is not None:
            return self.parent.get(key, default)
        else:
            return default

    def __getitem__(self, key: K) -> V:
        res = self.get(key, MISSING)
        if res is MISSING:
            raise EnvKeyError(key)
        return res

    def __contains__(self, key: K) -> bool:
        return self.get(key, MISSING) is not MISSING

    def as_dict(self) -> Dict[K, V]:
        """
        Flattens the chain into a plain dict, inner bindings shadowing outer
        ones.
        """
        flat = dict() if self.parent is None else self.parent.as_dict()
        flat.update(self.locals)
        return flat
