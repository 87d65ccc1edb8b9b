from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional, Set, TYPE_CHECKING

from mlconstraints import utils
from mlconstraints.log import logger
from mlconstraints.semantics import env
from mlconstraints.semantics import typ
from mlconstraints.semantics import typed

if TYPE_CHECKING:
    from mlconstraints.semantics import syntax

# Maps a name to its binder's type variable. `None` marks a let-bound name,
# whose uses each get a variable of their own.
Scope = env.Env[str, Optional[typ.Var]]


class Annotator:
    def __init__(self):
        self._fresh_ids = utils.fresh_ids()
        self.scope: Scope = env.Env()
        self.minted = 0

    def fresh_var(self) -> typ.Var:
        self.minted += 1
        return typ.Var(next(self._fresh_ids))

    @contextmanager
    def new_scope(self, name: str, var: Optional[typ.Var]) -> Iterator[None]:
        """
        A context manager for annotating inside a nested scope where `name`
        refers to `var`.

        Example:
        >>> annotator = Annotator()
        >>> alpha = annotator.fresh_var()
        >>> with annotator.new_scope("x", alpha):
        ...     assert annotator.scope["x"] == alpha
        >>> assert "x" not in annotator.scope
        """
        outer = self.scope
        self.scope = outer.extend(name, var)
        try:
            yield
        finally:
            self.scope = outer


def annotate(tree: syntax.AstNode) -> typed.TypedTerm:
    """
    Gives every node of `tree` a type variable, numbered from 1 in pre-order.
    Parameter uses share their parameter's variable.
    """
    annotator = Annotator()
    term = tree.annotate(annotator)
    logger.debug("annotated %s with %d type variables", term, annotator.minted)
    assert binders_aliased(term), f"Parameter uses not aliased in {term}"
    return term


def binders_aliased(term: typed.TypedTerm, scope: Optional[Scope] = None) -> bool:
    """
    Checks that every identifier captured by a function parameter carries
    that parameter's type variable, and that no use of a let-bound name does.
    """
    scope = env.Env() if scope is None else scope
    kind = term.kind

    if isinstance(kind, typed.Identifier):
        if kind.name not in scope:
            return True
        binder = scope[kind.name]
        return term.type == binder if binder is not None else term.type not in _binder_vars(scope)
    elif isinstance(kind, typed.Integer):
        return True
    elif isinstance(kind, typed.FunctionApplication):
        return binders_aliased(kind.function, scope) and binders_aliased(kind.argument, scope)
    elif isinstance(kind, typed.FunctionDefinition):
        inner = scope
        if isinstance(kind.parameter.kind, typed.Identifier):
            inner = scope.extend(kind.parameter.kind.name, kind.parameter.type)
        return binders_aliased(kind.body, inner)
    elif isinstance(kind, typed.IfExpression):
        return all(
            binders_aliased(t, scope)
            for t in (kind.condition, kind.true_branch, kind.false_branch)
        )
    elif isinstance(kind, typed.LetExpression):
        inner = scope
        if isinstance(kind.declaration_name.kind, typed.Identifier):
            inner = scope.extend(kind.declaration_name.kind.name, None)
        return binders_aliased(kind.declaration_value, scope) and \
               binders_aliased(kind.expression, inner)
    else:
        raise TypeError(f"Unknown term kind: {type(kind).__name__}")


def _binder_vars(scope: Optional[Scope]) -> Set[typ.Var]:
    # Walks the whole chain, shadowed parameters included.
    found = set()
    while scope is not None:
        found.update(v for v in scope.locals.values() if v is not None)
        scope = scope.parent
    return found
