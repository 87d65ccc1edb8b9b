import rply

from mlconstraints.parsing import lexer
from mlconstraints.semantics import syntax

pg = rply.ParserGenerator(
    lexer.all_tokens,
    precedence=[
        ("left", ["FN", "DARROW"]),
        ("left", ["IF", "THEN", "ELSE"]),
        ("left", ["EQ"]),
        ("left", ["PLUS", "MINUS"]),
        ("left", ["STAR", "SLASH"]),
    ],
    cache_id="mlconstraints",
)


@pg.production("expr : FN IDENT DARROW expr")
def fn_expr(s):
    _FN, param, _DARROW, body = s
    return syntax.Lambda(syntax.Ident(param.value), body)


@pg.production("expr : IF expr THEN expr ELSE expr")
def if_expr(s):
    _IF, pred, _THEN, yes, _ELSE, no = s
    return syntax.If(pred, yes, no)


@pg.production("expr : LET VAL IDENT EQ expr IN expr END")
def let_expr(s):
    _LET, _VAL, ident, _EQ, right, _IN, body, _END = s
    return syntax.Let(syntax.Ident(ident.value), right, body)


@pg.production("expr : expr PLUS expr")
@pg.production("expr : expr MINUS expr")
@pg.production("expr : expr STAR expr")
@pg.production("expr : expr SLASH expr")
@pg.production("expr : expr EQ expr")
def bin_op_expr(s):
    expr1, op, expr2 = s
    ident = syntax.Ident(op.value)
    return syntax.Call(syntax.Call(ident, expr1), expr2)


@pg.production("expr : application")
def application_expr(s):
    return s[0]


@pg.production("application : application atom")
def fn_call(s):
    fn, arg = s
    return syntax.Call(fn, arg)


@pg.production("application : atom")
def application_atom(s):
    return s[0]


@pg.production("atom : INT_LIT")
def int_lit_expr(s):
    [int_lit] = s
    return syntax.Const(int(int_lit.value))


@pg.production("atom : IDENT")
def ident_expr(s):
    [ident] = s
    return syntax.Ident(ident.value)


@pg.production("atom : LPAREN expr RPAREN")
def paren_expr(s):
    _LPAREN, expr, _RPAREN = s
    return expr


parser = pg.build()
