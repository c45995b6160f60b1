"""Continuation-passing transformation of linked programs."""

from __future__ import annotations

from typing import Any

from .syntax import (
    Abs,
    App,
    CharLit,
    Comatch,
    Comatcher,
    Ctor,
    Do,
    Dtor,
    Force,
    IntLit,
    Let,
    Match,
    Matcher,
    Module,
    Prim,
    Program,
    Rec,
    Ret,
    SemThunk,
    StrLit,
    Thunk,
    Var,
)

_CALL = "$call"
_CONT = "$cont"


def cps_transform(node: Any) -> Any:
    """Rewrite ``ret`` and ``do`` into explicit continuation passing."""
    match node:
        case Abs(param, body):
            return Abs(param, cps_transform(body))
        case App(body, arg):
            return App(cps_transform(body), cps_transform(arg))
        case Do(var, comp, body):
            return App(
                Dtor(cps_transform(comp), _CALL),
                Thunk(Abs(var, cps_transform(body))),
            )
        case Ret(value):
            return Comatch(
                (
                    Comatcher(
                        _CALL,
                        Abs(_CONT, App(Force(Var(_CONT)), cps_transform(value))),
                    ),
                )
            )
        case Force(value):
            return Force(cps_transform(value))
        case Let(var, definition, body):
            return Let(var, cps_transform(definition), cps_transform(body))
        case Rec(var, body):
            return Rec(var, cps_transform(body))
        case Match(scrut, arms):
            return Match(
                cps_transform(scrut),
                tuple(Matcher(a.ctor, a.vars, cps_transform(a.body)) for a in arms),
            )
        case Comatch(arms):
            return Comatch(tuple(Comatcher(a.dtor, cps_transform(a.body)) for a in arms))
        case Dtor(body, dtor):
            return Dtor(cps_transform(body), dtor)
        case Prim():
            return node
        case SemThunk():
            raise ValueError("runtime values cannot be transformed")
        case Ctor(name, args):
            return Ctor(name, tuple(cps_transform(arg) for arg in args))
        case Thunk(body):
            return Thunk(cps_transform(body))
        case Var() | IntLit() | StrLit() | CharLit():
            return node
        case Module(name, define):
            return Module(name, tuple((var, cps_transform(val)) for var, val in define))
        case Program(module, entry):
            return Program(cps_transform(module), cps_transform(entry))
    raise TypeError(f"cannot transform {type(node).__name__}")