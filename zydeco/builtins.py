"""Primitive operations of the standard library and the linker that installs them."""

from __future__ import annotations

import random
import re
from collections.abc import Callable, Iterable, Sequence
from typing import TextIO

from .syntax import (
    App,
    CharLit,
    Computation,
    Ctor,
    Force,
    IntLit,
    Module,
    Prim,
    ProgramExit,
    Ret,
    SemThunk,
    StrLit,
    Thunk,
    Value,
)

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


def _wrap(n: int, bits: int) -> int:
    half = 1 << (bits - 1)
    return ((n + half) % (1 << bits)) - half


def _ret(value: Value) -> Computation:
    return Ret(value)


def _app(body: Computation, arg: Value) -> Computation:
    return App(body, arg)


def _bool(b: bool) -> Ctor:
    return Ctor("True" if b else "False")


def _some(value: Value) -> Ctor:
    return Ctor("Some", (value,))


def _none() -> Ctor:
    return Ctor("None")


def _pair(a: str, b: str) -> Ctor:
    return Ctor("Cons", (StrLit(a), StrLit(b)))


def _bad_args(name: str, args: Sequence[Value]) -> TypeError:
    kinds = ", ".join(type(a).__name__ for a in args)
    return TypeError(f"{name}: unexpected arguments ({kinds})")


def _parse_i64(text: str) -> int | None:
    if not _INT_PATTERN.fullmatch(text):
        return None
    number = int(text)
    if not _I64_MIN <= number <= _I64_MAX:
        return None
    return number


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return -q if (a < 0) != (b < 0) else q


# --------------------------------- arithmetic --------------------------------


def _int_pair(name: str, args: Sequence[Value]) -> tuple[int, int]:
    match args:
        case [IntLit(a), IntLit(b)]:
            return a, b
    raise _bad_args(name, args)


def add(args, input, output, argv):
    a, b = _int_pair("add", args)
    return _ret(IntLit(_wrap(a + b, 64)))


def sub(args, input, output, argv):
    a, b = _int_pair("sub", args)
    return _ret(IntLit(_wrap(a - b, 64)))


def mul(args, input, output, argv):
    a, b = _int_pair("mul", args)
    return _ret(IntLit(_wrap(a * b, 64)))


def div(args, input, output, argv):
    """Integer division truncating toward zero."""
    a, b = _int_pair("div", args)
    if b == 0:
        raise ZeroDivisionError("attempt to divide by zero")
    return _ret(IntLit(_wrap(_trunc_div(a, b), 64)))


def modulo(args, input, output, argv):
    """Remainder with the sign of the dividend."""
    a, b = _int_pair("mod", args)
    if b == 0:
        raise ZeroDivisionError("attempt to calculate the remainder with a divisor of zero")
    return _ret(IntLit(_wrap(a - b * _trunc_div(a, b), 64)))


def int_eq(args, input, output, argv):
    a, b = _int_pair("int_eq", args)
    return _ret(_bool(a == b))


def int_lt(args, input, output, argv):
    a, b = _int_pair("int_lt", args)
    return _ret(_bool(a < b))


def int_gt(args, input, output, argv):
    a, b = _int_pair("int_gt", args)
    return _ret(_bool(a > b))


# ---------------------------------- strings ----------------------------------


def str_length(args, input, output, argv):
    match args:
        case [StrLit(s)]:
            return _ret(IntLit(len(s)))
    raise _bad_args("str_length", args)


def str_append(args, input, output, argv):
    match args:
        case [StrLit(a), StrLit(b)]:
            return _ret(StrLit(a + b))
    raise _bad_args("str_append", args)


def str_split_once(args, input, output, argv):
    match args:
        case [StrLit(s), CharLit(p)]:
            head, sep, tail = s.partition(p)
            if not sep:
                return _ret(_none())
            return _ret(_some(_pair(head, tail)))
    raise _bad_args("str_split_once", args)


def str_split_n(args, input, output, argv):
    match args:
        case [StrLit(s), IntLit(n)]:
            if n < 0:
                return _ret(_none())
            if n > len(s):
                raise IndexError(f"split position {n} out of range for length {len(s)}")
            return _ret(_some(_pair(s[:n], s[n:])))
    raise _bad_args("str_split_n", args)


def str_eq(args, input, output, argv):
    match args:
        case [StrLit(a), StrLit(b)]:
            return _ret(_bool(a == b))
    raise _bad_args("str_eq", args)


def str_index(args, input, output, argv):
    match args:
        case [StrLit(s), IntLit(i)]:
            if not 0 <= i < len(s):
                raise IndexError(f"index {i} out of range for length {len(s)}")
            return _ret(CharLit(s[i]))
    raise _bad_args("str_index", args)


def int_to_str(args, input, output, argv):
    match args:
        case [IntLit(a)]:
            return _ret(StrLit(str(a)))
    raise _bad_args("int_to_str", args)


def char_to_str(args, input, output, argv):
    match args:
        case [CharLit(c)]:
            return _ret(StrLit(c))
    raise _bad_args("char_to_str", args)


def char_to_int(args, input, output, argv):
    """The low byte of the character's code point."""
    match args:
        case [CharLit(c)]:
            return _ret(IntLit(ord(c) & 0xFF))
    raise _bad_args("char_to_int", args)


def str_to_int(args, input, output, argv):
    match args:
        case [StrLit(s)]:
            number = _parse_i64(s)
            if number is None:
                raise ValueError(f"invalid integer: {s!r}")
            return _ret(IntLit(number))
    raise _bad_args("str_to_int", args)


# ------------------------------------ I/O ------------------------------------


def _read_line(stream: TextIO) -> str:
    # Drops the final character, the newline when there is one.
    return stream.readline()[:-1]


def write_str(args, input, output, argv):
    match args:
        case [StrLit(s), SemThunk() as k]:
            output.write(s)
            output.flush()
            return Force(k)
    raise _bad_args("write_str", args)


def read_line(args, input, output, argv):
    match args:
        case [SemThunk() as k]:
            return _app(Force(k), StrLit(_read_line(input)))
    raise _bad_args("read_line", args)


def read_line_as_int(args, input, output, argv):
    match args:
        case [SemThunk() as k]:
            number = _parse_i64(_read_line(input))
            result = _none() if number is None else _some(IntLit(number))
            return _app(Force(k), result)
    raise _bad_args("read_line_as_int", args)


def read_till_eof(args, input, output, argv):
    match args:
        case [SemThunk() as k]:
            return _app(Force(k), StrLit(input.read()))
    raise _bad_args("read_till_eof", args)


def arg_list(args, input, output, argv):
    match args:
        case [k]:
            listed: Value = Ctor("Nil")
            for arg in reversed(list(argv)):
                listed = Ctor("Cons", (StrLit(arg), listed))
            return _app(Force(k), listed)
    raise _bad_args("arg_list", args)


def random_int(args, input, output, argv):
    match args:
        case [k]:
            return _app(Force(k), IntLit(random.randint(_I64_MIN, _I64_MAX)))
    raise _bad_args("random_int", args)


def exit(args, input, output, argv):
    match args:
        case [IntLit(code)]:
            raise ProgramExit(_wrap(code, 32))
    raise _bad_args("exit", args)


# ---------------------------------- library ----------------------------------

_BUILTINS: tuple[tuple[str, int, Callable[..., Computation]], ...] = (
    ("add", 2, add),
    ("sub", 2, sub),
    ("mul", 2, mul),
    ("div", 2, div),
    ("mod", 2, modulo),
    ("int_eq", 2, int_eq),
    ("int_lt", 2, int_lt),
    ("int_gt", 2, int_gt),
    ("str_length", 1, str_length),
    ("str_append", 2, str_append),
    ("str_split_once", 2, str_split_once),
    ("str_split_n", 2, str_split_n),
    ("str_eq", 2, str_eq),
    ("str_index", 2, str_index),
    ("int_to_str", 1, int_to_str),
    ("char_to_str", 1, char_to_str),
    ("char_to_int", 1, char_to_int),
    ("str_to_int", 1, str_to_int),
    ("write_str", 2, write_str),
    ("read_line", 1, read_line),
    ("read_line_as_int", 1, read_line_as_int),
    ("read_till_eof", 1, read_till_eof),
    ("arg_list", 1, arg_list),
    ("random_int", 1, random_int),
    ("exit", 1, exit),
)


def std_library() -> dict[str, Thunk]:
    """Map each builtin name to a thunk wrapping its primitive."""
    return {name: Thunk(Prim(arity, body)) for name, arity, body in _BUILTINS}


def link_module(
    name: str | None,
    externs: Iterable[str],
    defines: Iterable[tuple[str, Value]],
) -> Module:
    """Build a module: extern names bound to builtins first, then the definitions."""
    library = std_library()
    define: list[tuple[str, Value]] = []
    for symbol in externs:
        if symbol not in library:
            raise LookupError(f"no implementation found for the extern term definition: {symbol}")
        define.append((symbol, library[symbol]))
    define.extend(defines)
    return Module(name, tuple(define))