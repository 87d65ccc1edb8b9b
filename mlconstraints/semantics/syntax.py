from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from mlconstraints.semantics import annotation
from mlconstraints.semantics import typed


class AstNode(ABC):
    @abstractmethod
    def annotate(self, annotator: annotation.Annotator) -> typed.TypedTerm:
        """
        Returns a `typed.TypedTerm` mirroring `self`, with a type variable
        minted by `annotator` on every node. A node takes its own variable
        before any of its children do.
        """
        pass


@dataclass
class Ident(AstNode):
    """
    An identifier.
    x, inc, +
    """
    name: str

    def annotate(self, annotator: annotation.Annotator) -> typed.TypedTerm:
        var = annotator.scope.get(self.name)
        if var is None:
            var = annotator.fresh_var()
        return typed.TypedTerm(var, typed.Identifier(self.name))

    def __str__(self):
        return self.name


@dataclass
class Const(AstNode):
    """
    An integer literal.
    0, 1, 42
    """
    value: int

    def annotate(self, annotator: annotation.Annotator) -> typed.TypedTerm:
        return typed.TypedTerm(annotator.fresh_var(), typed.Integer(self.value))

    def __str__(self):
        return str(self.value)


@dataclass
class Lambda(AstNode):
    """
    fn param => body
    """
    param: Ident
    body: AstNode

    def annotate(self, annotator: annotation.Annotator) -> typed.TypedTerm:
        fn_type = annotator.fresh_var()
        param_type = annotator.fresh_var()
        param = typed.TypedTerm(param_type, typed.Identifier(self.param.name))

        # Uses of `self.param` inside the body share `param_type`.
        with annotator.new_scope(self.param.name, param_type):
            body = self.body.annotate(annotator)

        return typed.TypedTerm(fn_type, typed.FunctionDefinition(param, body))


@dataclass
class Call(AstNode):
    """
    fn arg
    """
    fn: AstNode
    arg: AstNode

    def annotate(self, annotator: annotation.Annotator) -> typed.TypedTerm:
        call_type = annotator.fresh_var()
        fn = self.fn.annotate(annotator)
        arg = self.arg.annotate(annotator)
        return typed.TypedTerm(call_type, typed.FunctionApplication(fn, arg))


@dataclass
class If(AstNode):
    """
    if pred then yes else no
    """
    pred: AstNode
    yes: AstNode
    no: AstNode

    def annotate(self, annotator: annotation.Annotator) -> typed.TypedTerm:
        if_type = annotator.fresh_var()
        pred = self.pred.annotate(annotator)
        yes = self.yes.annotate(annotator)
        no = self.no.annotate(annotator)
        return typed.TypedTerm(if_type, typed.IfExpression(pred, yes, no))


@dataclass
class Let(AstNode):
    """
    let val left = right in body end
    """
    left: Ident
    right: AstNode
    body: AstNode

    def annotate(self, annotator: annotation.Annotator) -> typed.TypedTerm:
        let_type = annotator.fresh_var()
        left = typed.TypedTerm(annotator.fresh_var(), typed.Identifier(self.left.name))

        # `right` can't see `left`. Inside `body`, `left` hides any outer
        # parameter of the same name, and each use gets its own variable.
        right = self.right.annotate(annotator)
        with annotator.new_scope(self.left.name, None):
            body = self.body.annotate(annotator)

        return typed.TypedTerm(let_type, typed.LetExpression(left, right, body))
