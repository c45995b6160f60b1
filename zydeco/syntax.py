"""Syntax of linked programs and runtime values, with a pretty-printer."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, TextIO, Union


class Env:
    """Persistent variable environment: ``update`` returns a new environment."""

    __slots__ = ("_bindings",)

    def __init__(self, bindings: Mapping[str, Any] | None = None) -> None:
        self._bindings: dict[str, Any] = dict(bindings or {})

    def update(self, name: str, value: Any) -> Env:
        """Return a new environment with ``name`` bound to ``value``."""
        bindings = dict(self._bindings)
        bindings[name] = value
        return Env(bindings)

    def lookup(self, name: str) -> Any | None:
        """Return the value bound to ``name``, or None if it is unbound."""
        return self._bindings.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._bindings

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Env):
            return NotImplemented
        return self._bindings == other._bindings

    def __repr__(self) -> str:
        return f"Env({self._bindings!r})"


# ---------------------------------- values ----------------------------------


@dataclass(frozen=True)
class IntLit:
    value: int


@dataclass(frozen=True)
class StrLit:
    value: str


@dataclass(frozen=True)
class CharLit:
    value: str


@dataclass(frozen=True)
class Var:
    name: str


@dataclass(frozen=True)
class Thunk:
    """A suspended computation, not yet closed over an environment."""

    body: Computation


@dataclass(frozen=True)
class Ctor:
    name: str
    args: tuple[Value, ...] = ()


@dataclass(frozen=True)
class SemThunk:
    """A suspended computation closed over the environment it was made in."""

    body: Computation
    env: Env


# ------------------------------- computations -------------------------------


@dataclass(frozen=True)
class Abs:
    param: str
    body: Computation


@dataclass(frozen=True)
class App:
    body: Computation
    arg: Value


@dataclass(frozen=True)
class Ret:
    value: Value


@dataclass(frozen=True)
class Force:
    value: Value


@dataclass(frozen=True)
class Let:
    var: str
    definition: Value
    body: Computation


@dataclass(frozen=True)
class Do:
    var: str
    comp: Computation
    body: Computation


@dataclass(frozen=True)
class Rec:
    var: str
    body: Computation


@dataclass(frozen=True)
class Matcher:
    ctor: str
    vars: tuple[str, ...]
    body: Computation


@dataclass(frozen=True)
class Match:
    scrut: Value
    arms: tuple[Matcher, ...]


@dataclass(frozen=True)
class Comatcher:
    dtor: str
    body: Computation


@dataclass(frozen=True)
class Comatch:
    arms: tuple[Comatcher, ...]


@dataclass(frozen=True)
class Dtor:
    body: Computation
    dtor: str


PrimBody = Callable[[list, TextIO, TextIO, Sequence[str]], "Computation"]


@dataclass(frozen=True)
class Prim:
    """A primitive taking ``arity`` arguments from the stack."""

    arity: int
    body: PrimBody


# ------------------------------ modules, results -----------------------------


@dataclass(frozen=True)
class Module:
    name: str | None
    define: tuple[tuple[str, Value], ...] = ()


@dataclass(frozen=True)
class Program:
    module: Module
    entry: Computation


@dataclass(frozen=True)
class Returned:
    """The program finished by returning a value to an empty stack."""

    value: Value


@dataclass(frozen=True)
class ExitCode:
    """The program finished by calling exit."""

    code: int


@dataclass(frozen=True)
class ProgramResult:
    name: str | None
    entry: Returned | ExitCode


class ProgramExit(Exception):
    """Raised by a primitive to end the program with an exit code."""

    def __init__(self, code: int) -> None:
        super().__init__(f"exit({code})")
        self.code = code


Value = Union[Var, Thunk, Ctor, IntLit, StrLit, CharLit, SemThunk]
Computation = Union[Abs, App, Ret, Force, Let, Do, Rec, Match, Comatch, Dtor, Prim]


# ---------------------------------- printing ---------------------------------


_ESCAPES = {"\\": "\\\\", '"': '\\"', "'": "\\'", "\n": "\\n", "\t": "\\t", "\r": "\\r"}


def _escape(text: str) -> str:
    return "".join(_ESCAPES.get(c, c) for c in text)


def _br(indent: int) -> str:
    return "\n" + "  " * indent


def _fmt_thunk(body: Computation, indent: int) -> str:
    inner = fmt(body, indent + 1)
    if len(inner) > 40:
        return "{ " + inner + _br(indent) + "}"
    return "{ " + inner + " }"


def fmt(node: Any, indent: int = 0) -> str:
    """Render a syntax node, runtime value or result as text."""
    br = _br(indent)
    match node:
        case IntLit(value):
            return str(value)
        case StrLit(value):
            return '"' + _escape(value) + '"'
        case CharLit(value):
            return "'" + _escape(value) + "'"
        case Var(name):
            return name
        case Thunk(body) | SemThunk(body, _):
            return _fmt_thunk(body, indent)
        case Ctor(name, args):
            return f"{name}({', '.join(fmt(a, indent) for a in args)})"
        case Abs(param, body):
            return f"fn ({param}) -> {fmt(body, indent)}"
        case App(body, arg):
            return f"{fmt(body, indent)} {fmt(arg, indent)}"
        case Ret(value):
            return f"ret {fmt(value, indent)}"
        case Force(value):
            return f"! {fmt(value, indent)}"
        case Let(var, definition, body):
            return f"let {var} = {fmt(definition, indent)};{br}{fmt(body, indent)}"
        case Do(var, comp, body):
            return f"do {var} <- {fmt(comp, indent)};{br}{fmt(body, indent)}"
        case Rec(var, body):
            return f"rec ({var}) -> {fmt(body, indent)}"
        case Match(scrut, arms):
            text = f"match {fmt(scrut, indent)}"
            for arm in arms:
                text += f"{br}| {arm.ctor}({', '.join(arm.vars)}) -> {fmt(arm.body, indent + 1)}"
            return text + br + "end"
        case Comatch(arms):
            text = "comatch"
            for arm in arms:
                text += f"{br}| .{arm.dtor} -> {fmt(arm.body, indent + 1)}"
            return text + br + "end"
        case Dtor(body, dtor):
            return f"{fmt(body, indent)} .{dtor}"
        case Prim(arity, _):
            return f"prim(..{arity}..)"
        case Module(name, define):
            text = ""
            if name is not None:
                text += f"module {name} where" + br
            for var, definition in define:
                text += f"def {var} = {fmt(definition, indent)}" + br
            text += br
            if name is not None:
                text += "end" + br
            return text
        case Program(module, entry):
            return fmt(module, indent) + br + fmt(entry, indent)
        case Returned(value):
            return fmt(value, indent)
        case ExitCode(code):
            return f"exit({code})"
        case ProgramResult(_, entry):
            return fmt(entry, indent)
    raise TypeError(f"cannot format {type(node).__name__}")