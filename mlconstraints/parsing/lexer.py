import rply

lg = rply.lexergenerator.LexerGenerator()

lg.add("DARROW", r"=>")

lg.add("LET", r"let\b")
lg.add("VAL", r"val\b")
lg.add("IN", r"in\b")
lg.add("END", r"end\b")

lg.add("IF", r"if\b")
lg.add("THEN", r"then\b")
lg.add("ELSE", r"else\b")

lg.add("FN", r"fn\b")  # for lambda expressions

lg.add("LPAREN", r"\(")
lg.add("RPAREN", r"\)")

lg.add("INT_LIT", r"\d+")
lg.add("IDENT", r"[a-zA-Z_][a-zA-Z0-9'_]*")

lg.add("EQ", r"=")
lg.add("PLUS", r"\+")
lg.add("MINUS", r"-")
lg.add("STAR", r"\*")
lg.add("SLASH", r"/")

lg.ignore(r"\s+")

lexer = lg.build()
all_tokens = [rule.name for rule in lexer.rules]
