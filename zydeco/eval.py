"""A stack machine evaluating linked programs."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TextIO, Union

from .syntax import (
    Abs,
    App,
    CharLit,
    Comatch,
    Computation,
    Ctor,
    Do,
    Dtor,
    Env,
    ExitCode,
    Force,
    IntLit,
    Let,
    Match,
    Module,
    Prim,
    Program,
    ProgramExit,
    ProgramResult,
    Rec,
    Ret,
    Returned,
    SemThunk,
    StrLit,
    Thunk,
    Value,
    Var,
)


@dataclass(frozen=True)
class KontFrame:
    """Continuation pushed by ``do``: resume ``body`` in ``env`` with ``var`` bound."""

    body: Computation
    env: Env
    var: str


@dataclass(frozen=True)
class AppFrame:
    """An argument waiting for a function."""

    value: Value


@dataclass(frozen=True)
class DtorFrame:
    """A destructor waiting for a comatch."""

    dtor: str


Frame = Union[KontFrame, AppFrame, DtorFrame]


class EvalError(RuntimeError):
    """The machine reached a state that a well-typed program never reaches."""


class Runtime:
    """Machine state: the stack, the environment, and the program's I/O."""

    def __init__(
        self,
        input: TextIO | None = None,
        output: TextIO | None = None,
        args: Sequence[str] = (),
    ) -> None:
        self.input = sys.stdin if input is None else input
        self.output = sys.stdout if output is None else output
        self.args = list(args)
        self.stack: list[Frame] = []
        self.env = Env()

    def _pop(self) -> Frame | None:
        return self.stack.pop() if self.stack else None

    def eval_value(self, value: Value) -> Value:
        """Evaluate a value to a runtime value in the current environment."""
        match value:
            case Var(name):
                found = self.env.lookup(name)
                if found is None:
                    raise EvalError(f"variable does not exist: {name}")
                return found
            case Thunk(body):
                return SemThunk(body, self.env)
            case Ctor(name, args):
                return Ctor(name, tuple(self.eval_value(arg) for arg in args))
            case IntLit() | StrLit() | CharLit() | SemThunk():
                return value
        raise TypeError(f"not a value: {type(value).__name__}")

    def step(self, comp: Computation) -> Computation | Returned | ExitCode:
        """Run one step; return the next computation or the final outcome."""
        match comp:
            case Abs(param, body):
                frame = self._pop()
                if not isinstance(frame, AppFrame):
                    raise EvalError("App not at stacktop")
                self.env = self.env.update(param, frame.value)
                return body
            case App(body, arg):
                self.stack.append(AppFrame(self.eval_value(arg)))
                return body
            case Ret(value):
                result = self.eval_value(value)
                frame = self._pop()
                if frame is None:
                    return Returned(result)
                if not isinstance(frame, KontFrame):
                    raise EvalError("Kont not at stacktop")
                self.env = frame.env.update(frame.var, result)
                return frame.body
            case Force(value):
                thunk = self.eval_value(value)
                if not isinstance(thunk, SemThunk):
                    raise EvalError("Force on non-thunk")
                self.env = thunk.env
                return thunk.body
            case Let(var, definition, body):
                self.env = self.env.update(var, self.eval_value(definition))
                return body
            case Do(var, inner, body):
                self.stack.append(KontFrame(body, self.env, var))
                return inner
            case Rec(var, body):
                self.env = self.env.update(var, SemThunk(comp, self.env))
                return body
            case Match(scrut, arms):
                scrutinee = self.eval_value(scrut)
                if not isinstance(scrutinee, Ctor):
                    raise EvalError("Match on non-ctor")
                arm = next((a for a in arms if a.ctor == scrutinee.name), None)
                if arm is None:
                    raise EvalError(f"no matching arm for {scrutinee.name}")
                for var, arg in zip(arm.vars, scrutinee.args):
                    self.env = self.env.update(var, arg)
                return arm.body
            case Comatch(arms):
                frame = self._pop()
                if not isinstance(frame, DtorFrame):
                    raise EvalError("Comatch on non-Dtor")
                coarm = next((a for a in arms if a.dtor == frame.dtor), None)
                if coarm is None:
                    raise EvalError(f"no matching arm for .{frame.dtor}")
                return coarm.body
            case Dtor(body, dtor):
                self.stack.append(DtorFrame(dtor))
                return body
            case Prim(arity, body):
                args = []
                for _ in range(arity):
                    frame = self._pop()
                    if not isinstance(frame, AppFrame):
                        raise EvalError("Prim on non-App")
                    args.append(frame.value)
                try:
                    return body(args, self.input, self.output, self.args)
                except ProgramExit as exc:
                    return ExitCode(exc.code)
        raise TypeError(f"not a computation: {type(comp).__name__}")

    def eval_computation(self, comp: Computation) -> Returned | ExitCode:
        """Step ``comp`` until the program returns or exits."""
        current: Computation | Returned | ExitCode = comp
        while not isinstance(current, (Returned, ExitCode)):
            current = self.step(current)
        return current

    def eval_module(self, module: Module) -> str | None:
        """Bind every definition of ``module`` in order; return its name."""
        for name, value in module.define:
            self.env = self.env.update(name, self.eval_value(value))
        return module.name

    def eval_program(self, program: Program) -> ProgramResult:
        """Load the program's module, then run its entry computation."""
        name = self.eval_module(program.module)
        return ProgramResult(name, self.eval_computation(program.entry))