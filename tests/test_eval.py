import io

import pytest

from zydeco.eval import AppFrame, DtorFrame, EvalError, KontFrame, Runtime
from zydeco.syntax import (
    Abs,
    App,
    Comatch,
    Comatcher,
    Ctor,
    Do,
    Dtor,
    Env,
    ExitCode,
    Force,
    IntLit,
    Let,
    Match,
    Matcher,
    Module,
    Prim,
    Program,
    ProgramExit,
    Rec,
    Ret,
    Returned,
    SemThunk,
    StrLit,
    Thunk,
    Var,
)


def run(comp, **kwargs):
    return Runtime(io.StringIO(), io.StringIO(), **kwargs).eval_computation(comp)


def test_ret_on_empty_stack():
    assert run(Ret(IntLit(3))) == Returned(IntLit(3))


def test_application_binds_parameter():
    assert run(App(Abs("x", Ret(Var("x"))), IntLit(7))) == Returned(IntLit(7))


def test_let_binding():
    assert run(Let("x", StrLit("hi"), Ret(Var("x")))) == Returned(StrLit("hi"))


def test_do_binds_result():
    comp = Do("x", Ret(IntLit(5)), Ret(Ctor("Box", (Var("x"),))))
    assert run(comp) == Returned(Ctor("Box", (IntLit(5),)))


def test_do_restores_environment():
    comp = Let(
        "y",
        IntLit(1),
        Do("x", Let("y", IntLit(2), Ret(Var("y"))), Ret(Ctor("P", (Var("x"), Var("y"))))),
    )
    assert run(comp) == Returned(Ctor("P", (IntLit(2), IntLit(1))))


def test_thunk_captures_environment():
    comp = Let(
        "x",
        IntLit(1),
        Let("t", Thunk(Ret(Var("x"))), Let("x", IntLit(2), Force(Var("t")))),
    )
    assert run(comp) == Returned(IntLit(1))


def test_match_selects_arm_and_binds():
    comp = Match(
        Ctor("Some", (IntLit(9),)),
        (
            Matcher("None", (), Ret(IntLit(0))),
            Matcher("Some", ("v",), Ret(Var("v"))),
        ),
    )
    assert run(comp) == Returned(IntLit(9))


def test_comatch_with_dtor():
    comp = Dtor(
        Comatch((Comatcher("a", Ret(StrLit("A"))), Comatcher("b", Ret(StrLit("B"))))),
        "b",
    )
    assert run(comp) == Returned(StrLit("B"))


def test_rec_binds_itself():
    body = Comatch(
        (
            Comatcher("stop", Ret(StrLit("done"))),
            Comatcher("again", Dtor(Force(Var("r")), "stop")),
        )
    )
    assert run(Dtor(Rec("r", body), "again")) == Returned(StrLit("done"))


def _pair(args, input, output, argv):
    return Ret(Ctor("Pair", tuple(args)))


def test_prim_receives_arguments_in_order():
    comp = App(App(Prim(2, _pair), IntLit(10)), IntLit(3))
    assert run(comp) == Returned(Ctor("Pair", (IntLit(10), IntLit(3))))


def _exit(args, input, output, argv):
    raise ProgramExit(args[0].value)


def test_prim_exit_gives_exit_code():
    assert run(App(Prim(1, _exit), IntLit(4))) == ExitCode(4)


def _echo(args, input, output, argv):
    output.write(input.readline())
    return Ret(StrLit(",".join(argv)))


def test_prim_uses_runtime_io_and_args():
    out = io.StringIO()
    runtime = Runtime(io.StringIO("line\n"), out, ["a", "b"])
    assert runtime.eval_computation(Prim(0, _echo)) == Returned(StrLit("a,b"))
    assert out.getvalue() == "line\n"


def test_eval_value_thunk_closes_over_env():
    runtime = Runtime(io.StringIO(), io.StringIO())
    runtime.env = Env().update("x", IntLit(1))
    value = runtime.eval_value(Thunk(Ret(Var("x"))))
    assert value == SemThunk(Ret(Var("x")), runtime.env)


def test_step_pushes_frames():
    runtime = Runtime(io.StringIO(), io.StringIO())
    assert runtime.step(Dtor(Ret(IntLit(1)), "d")) == Ret(IntLit(1))
    assert runtime.stack == [DtorFrame("d")]
    assert runtime.step(App(Ret(IntLit(1)), IntLit(2))) == Ret(IntLit(1))
    assert runtime.stack[-1] == AppFrame(IntLit(2))
    runtime.step(Do("x", Ret(IntLit(0)), Ret(Var("x"))))
    assert runtime.stack[-1] == KontFrame(Ret(Var("x")), runtime.env, "x")


def test_unbound_variable():
    with pytest.raises(EvalError):
        run(Ret(Var("missing")))


def test_force_non_thunk():
    with pytest.raises(EvalError):
        run(Force(IntLit(1)))


def test_abs_without_argument():
    with pytest.raises(EvalError):
        run(Abs("x", Ret(Var("x"))))


def test_match_without_arm():
    with pytest.raises(EvalError):
        run(Match(Ctor("Other"), (Matcher("Some", ("v",), Ret(Var("v"))),)))


def test_comatch_without_dtor():
    with pytest.raises(EvalError):
        run(Comatch((Comatcher("a", Ret(IntLit(1))),)))


def test_ret_into_argument_frame():
    with pytest.raises(EvalError):
        run(App(Ret(IntLit(1)), IntLit(2)))


def test_eval_program_uses_module_definitions():
    program = Program(Module("main", (("x", IntLit(5)),)), Ret(Var("x")))
    result = Runtime(io.StringIO(), io.StringIO()).eval_program(program)
    assert result.name == "main"
    assert result.entry == Returned(IntLit(5))