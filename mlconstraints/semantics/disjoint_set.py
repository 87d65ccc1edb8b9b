from collections import defaultdict
from typing import Dict, Generic, Hashable, Set, TypeVar, Union

from mlconstraints import utils

E = TypeVar("E", bound=Hashable)


class DisjointSet(Generic[E]):
    """
    Union-find over hashable elements. A root maps to the size of its tree,
    every other element maps to its parent.
    """

    def __init__(self):
        self.map: Dict[E, Union[int, E]] = dict()

    def as_dict(self) -> Dict[E, Set[E]]:
        sets = defaultdict(set)
        for member in self.map.keys():
            root = self.root_of(member)
            sets[root].add(member)
        return sets

    def sets(self):
        return self.as_dict().values()

    def __repr__(self):
        cls_name = self.__class__.__name__
        sets = ", ".join(f"{utils.set_to_str(s)}" for s in self.sets())
        return f"{cls_name}({{ {sets} }})"

    def same_set(self, x: E, *ys: E) -> bool:
        assert len(ys) > 0, "`same_set` requires at least two arguments!"
        x_root = self.root_of(x)
        return all(x_root == self.root_of(y) for y in ys)

    def __contains__(self, other):
        return other in self.map.keys()

    def add(self, e: E) -> None:
        if e not in self.map.keys():
            self.map[e] = 1  # Root node of tree with size 1.

    def root_of(self, e: E) -> E:
        self.add(e)
        res = self.map[e]
        if type(res) is int:
            return e
        else:
            root = self.root_of(res)
            self.map[e] = root  # Path compression heuristic.
            return root

    def join_roots(self, r1: E, r2: E) -> None:
        """
        Assumes r1 and r2 are distinct roots.
        """
        size1, size2 = self.map[r1], self.map[r2]

        # Weighting heuristic.
        if size1 > size2:
            self.map[r1] += size2
            self.map[r2] = r1
        else:
            self.map[r2] += size1
            self.map[r1] = r2
