import itertools
from typing import Iterator

from mlconstraints.utils import unicode


def fresh_ids(start: int = 1) -> Iterator[int]:
    """
    An endless stream of integer identities, used to mint type variables.
    """
    return itertools.count(start)


def fresh_greek_stream() -> Iterator[str]:
    yield from unicode.GREEK_LOWER
    n = 1
    while True:
        yield from (f"{ch}{n}" for ch in unicode.GREEK_LOWER)
        n += 1


def set_to_str(s):
    ele_list = ", ".join(sorted(str(v) for v in s))
    return f"{{{ele_list}}}"


def instance(cls):
    """
    A class decorator that replaces its input class with an instance of that
    class.
    :param cls:
    :return:
    """
    return cls()
