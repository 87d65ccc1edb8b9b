from mlconstraints.semantics import syntax
from . import lexer
from . import parser


def parse(src_text: str) -> syntax.AstNode:
    return parser.parser.parse(lexer.lexer.lex(src_text))
