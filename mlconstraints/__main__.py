import argparse
import sys
from pathlib import Path
from typing import List, Optional

import rply

from mlconstraints import log
from mlconstraints import parsing
from mlconstraints.semantics import check
from mlconstraints.semantics import typ
from mlconstraints.semantics import unifier_set


def create_parser():
    ap = argparse.ArgumentParser(
        prog="mlconstraints",
        description="Infers the type of an expression by collecting and solving type constraints.",
    )

    ap.add_argument(
        "source_file",
        metavar="SRC",
        type=str,
        nargs="?",
        default=None,
        help="the file to check (starts a REPL if neither SRC nor -e is given)",
    )

    ap.add_argument(
        "-e",
        dest="expr",
        metavar="EXPR",
        type=str,
        default=None,
        help="an expression to check instead of a file",
    )

    ap.add_argument(
        "--constraints",
        dest="show_constraints",
        action="store_true",
        help="print the collected constraints before the inferred type",
    )

    ap.add_argument(
        "--log-level",
        dest="log_level",
        metavar="LEVEL",
        type=str,
        default=None,
        help="enable logging at LEVEL (DEBUG, INFO, WARNING, ...)",
    )

    ap.add_argument(
        "--log-file",
        dest="log_file",
        metavar="PATH",
        type=Path,
        default=None,
        help="write log records to PATH instead of stderr",
    )

    return ap


def error_message(err: Exception) -> str:
    if isinstance(err, rply.errors.LexingError):
        pos = err.source_pos
        if pos is None or (pos.lineno < 0 and pos.colno < 0):
            where = "" if pos is None else f" at index {pos.idx}"
        else:
            where = f" on line {pos.lineno}, column {pos.colno}"
        return f"Lexing Error: Unexpected character{where}!"

    if isinstance(err, rply.errors.ParsingError):
        pos = err.source_pos
        if pos is None:
            return "Parsing Error: Unexpected end of input!"
        return f"Parsing Error: Unexpected token on line {pos.lineno}, column {pos.colno}!"

    if isinstance(err, unifier_set.UnificationError):
        lines = [f"Type Error: {err.msg}"]
        if err.constraint is not None:
            lines.append(f"    while solving {err.constraint}")
            if err.constraint.origin is not None:
                lines.append(f"    from {err.constraint.origin}")
        return "\n".join(lines)

    return str(err)


def check_source(src_text: str, show_constraints: bool = False) -> None:
    """
    Infers the type of `src_text` and prints it. Lexing, parsing and type
    errors propagate to the caller.
    """
    checker = check.Checker()
    tree = parsing.parse(src_text)

    try:
        t = checker.infer_type(tree)
    finally:
        if show_constraints:
            for c in checker.constraints:
                print(c)

    print(f"_ : {typ.pretty(t)}")


def repl(show_constraints: bool = False):
    while True:
        try:
            inp = input("==> ")
        except EOFError:
            print()
            return

        if not inp.strip():
            continue

        try:
            check_source(inp, show_constraints)
        except (rply.errors.LexingError,
                rply.errors.ParsingError,
                unifier_set.UnificationError) as err:
            print(error_message(err))
            continue


def main(argv: Optional[List[str]] = None) -> int:
    ap = create_parser()
    args = ap.parse_args(argv)

    if args.log_level is not None or args.log_file is not None:
        log.configure(args.log_level or "DEBUG", args.log_file)

    if args.expr is not None:
        src_text = args.expr
    elif args.source_file is not None:
        src_text = Path(args.source_file).read_text()
    else:
        repl(args.show_constraints)
        return 0

    try:
        check_source(src_text, args.show_constraints)
    except (rply.errors.LexingError,
            rply.errors.ParsingError,
            unifier_set.UnificationError) as err:
        print(error_message(err), file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
