"""
The annotated syntax tree. Every `TypedTerm` pairs the type variable the
annotator gave it with one of six node kinds, and each kind knows the type
equations its own node contributes.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from mlconstraints.semantics import typ
from mlconstraints.semantics.constraint import Bindings, Constraint


@dataclass(frozen=True)
class TypedTerm:
    type: typ.Type
    kind: Kind

    def collect_constraints(self, bindings: Bindings) -> List[Constraint]:
        """
        Returns this node's own constraints followed by those of its
        children. `bindings` is never modified; scopes that need more names
        get an extended copy.
        """
        return self.kind.collect_constraints(self, bindings)

    def __str__(self):
        return str(self.kind)


class Kind(ABC):
    @abstractmethod
    def collect_constraints(self, term: TypedTerm, bindings: Bindings) -> List[Constraint]:
        pass


@dataclass(frozen=True)
class Integer(Kind):
    """
    An integer literal.
    0, 42
    """
    value: int

    def collect_constraints(self, term: TypedTerm, bindings: Bindings) -> List[Constraint]:
        return [Constraint(term.type, typ.Int, term)]

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class Identifier(Kind):
    """
    A name: a variable, a parameter or a built-in operator.
    x, inc, +
    """
    name: str

    def collect_constraints(self, term: TypedTerm, bindings: Bindings) -> List[Constraint]:
        # Unbound names are either free or share their binder's variable
        # already, so there is nothing to equate.
        bound = bindings.get(self.name)
        if bound is None:
            return []
        return [Constraint(term.type, bound, term)]

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class FunctionApplication(Kind):
    """
    function argument
    """
    function: TypedTerm
    argument: TypedTerm

    def collect_constraints(self, term: TypedTerm, bindings: Bindings) -> List[Constraint]:
        constraints = [
            Constraint(self.function.type, typ.Fn(self.argument.type, term.type), term),
        ]
        constraints += self.function.collect_constraints(bindings)
        constraints += self.argument.collect_constraints(bindings)
        return constraints

    def __str__(self):
        return f"({self.function} {self.argument})"


@dataclass(frozen=True)
class FunctionDefinition(Kind):
    """
    fn parameter => body
    """
    parameter: TypedTerm
    body: TypedTerm

    def collect_constraints(self, term: TypedTerm, bindings: Bindings) -> List[Constraint]:
        # The parameter stays out of `bindings`: its uses in the body already
        # carry the parameter's own type variable.
        constraints = [
            Constraint(term.type, typ.Fn(self.parameter.type, self.body.type), term),
        ]
        constraints += self.body.collect_constraints(bindings)
        return constraints

    def __str__(self):
        return f"(fn {self.parameter} => {self.body})"


@dataclass(frozen=True)
class IfExpression(Kind):
    """
    if condition then true_branch else false_branch
    """
    condition: TypedTerm
    true_branch: TypedTerm
    false_branch: TypedTerm

    def collect_constraints(self, term: TypedTerm, bindings: Bindings) -> List[Constraint]:
        constraints = [
            Constraint(term.type, self.true_branch.type, term),
            Constraint(term.type, self.false_branch.type, term),
            Constraint(self.condition.type, typ.Bool, term),
            Constraint(self.true_branch.type, self.false_branch.type, term),
        ]
        constraints += self.condition.collect_constraints(bindings)
        constraints += self.true_branch.collect_constraints(bindings)
        constraints += self.false_branch.collect_constraints(bindings)
        return constraints

    def __str__(self):
        return f"(if {self.condition} then {self.true_branch} else {self.false_branch})"


@dataclass(frozen=True)
class LetExpression(Kind):
    """
    let val declaration_name = declaration_value in expression end
    """
    declaration_name: TypedTerm
    declaration_value: TypedTerm
    expression: TypedTerm

    def collect_constraints(self, term: TypedTerm, bindings: Bindings) -> List[Constraint]:
        constraints = [
            Constraint(term.type, self.expression.type, term),
            Constraint(self.declaration_name.type, self.declaration_value.type, term),
        ]

        # A declaration name that isn't an identifier binds nothing.
        inner_bindings = bindings
        if isinstance(self.declaration_name.kind, Identifier):
            inner_bindings = bindings.extend(
                self.declaration_name.kind.name,
                self.declaration_name.type,
            )

        # The value is collected under the outer bindings: lets aren't
        # recursive.
        constraints += self.declaration_value.collect_constraints(bindings)
        constraints += self.expression.collect_constraints(inner_bindings)
        return constraints

    def __str__(self):
        return f"(let val {self.declaration_name} = {self.declaration_value} in {self.expression} end)"
