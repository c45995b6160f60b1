# zydeco

A runtime for linked programs of Zydeco, a small call-by-push-value
language, together with its primitive library and the pieces used to lay
out a project on disk. Programs are built directly as Python syntax trees;
see "What is not included" below.

## Modules

- `zydeco.syntax`: the program syntax as frozen dataclasses.
  Values: `Var`, `Thunk`, `Ctor`, `IntLit`, `StrLit`, `CharLit`, and the
  runtime closure `SemThunk`. Computations: `Abs`, `App`, `Ret`, `Force`,
  `Let`, `Do`, `Rec`, `Match` (with `Matcher` arms), `Comatch` (with
  `Comatcher` arms), `Dtor` and `Prim`. Containers: `Module` and `Program`.
  Outcomes: `Returned`, `ExitCode` and `ProgramResult`. `Env` is a
  persistent environment whose `update` returns a new environment and whose
  `lookup` returns `None` for an unbound name. `ProgramExit` is the
  exception a primitive raises to end the program. `fmt(node, indent)`
  renders any of these as text.
- `zydeco.eval`: `Runtime`, a stack machine with `eval_value`, `step`,
  `eval_computation`, `eval_module` and `eval_program`. Its stack holds
  `KontFrame`, `AppFrame` and `DtorFrame` entries. It reads from and writes
  to the streams passed in (standard input and output by default) and
  raises `EvalError` when it reaches a stuck state, such as an unbound
  variable, forcing a non-thunk, or a match with no arm for the constructor.
- `zydeco.cps`: `cps_transform`, which rewrites `ret` and `do` into explicit
  continuation passing through a `$call` destructor and a `$cont`
  parameter. It works on values, computations, modules and programs.
- `zydeco.builtins`: the primitives (`add`, `sub`, `mul`, `div`, `modulo`,
  `int_eq`, `int_lt`, `int_gt`, `str_length`, `str_append`,
  `str_split_once`, `str_split_n`, `str_eq`, `str_index`, `int_to_str`,
  `char_to_str`, `char_to_int`, `str_to_int`, `write_str`, `read_line`,
  `read_line_as_int`, `read_till_eof`, `arg_list`, `random_int`, `exit`).
  `std_library()` maps each builtin name (`mod` for `modulo`) to a thunk
  around its primitive. `link_module(name, externs, defines)` builds a
  `Module` that binds the extern names to their builtins first, then the
  given definitions, and raises `LookupError` for an extern with no builtin.
  Integer arithmetic wraps to 64 bits; `div` truncates toward zero and
  `modulo` takes the sign of the dividend; `exit` codes wrap to 32 bits.
- `zydeco.errors`: `SurfaceError` and its subclasses `PathNotFound`,
  `PathInvalid`, `ProjectInvalid`, `ProjectNameMismatch`, `ParseError`,
  `ResolveErrors` and `ModuleNotFound`.
- `zydeco.deps`: `DependencyTracker` records which file depends on which
  (`update_dep`, `update_deps`), and `gen_resolved()` turns it into a
  `ResolutionTracker` whose `pick` takes the lowest-numbered ready file,
  `pick_all` takes every ready file, and `done` releases the files waiting
  on a resolved one.
- `zydeco.project`: `ProjectMode` (`MANAGED`, `ROOT`, `ROOT_NO_STD`, parsed
  by `ProjectMode.from_name`), `Config`, `Package`, `FileLoc`,
  `load_config(path)` for reading a `Zydeco.toml`, and `open_package(path)`.
- `zydeco.modules`: `create_all_name` collects the module names defined under
  a directory, `find_mod_file` finds the file of a module by name, and
  `module_path_of_file` / `module_path_of_folder` turn a path relative to a
  project into a module path.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
import io

from zydeco.builtins import link_module
from zydeco.eval import Runtime
from zydeco.syntax import App, Force, IntLit, Program, Var, fmt

module = link_module(None, ["add"], [])
entry = App(App(Force(Var("add")), IntLit(1)), IntLit(2))

runtime = Runtime(io.StringIO(), io.StringIO(), [])
result = runtime.eval_program(Program(module, entry))
print(fmt(result))  # 3
```

`result.entry` is `Returned(IntLit(3))` here; a program that calls `exit`
ends with `ExitCode(code)` instead. Primitives that do I/O use the streams
given to `Runtime`, and `arg_list` hands the program the argument list
given there.

## Projects

A project directory holds a `Zydeco.toml` with a `name`, a `mode`
(`managed`, `root` or `root_no_std`; `Managed`, `Root` and `RootNoStd` are
accepted too) and a list of `deps`. `open_package` returns a `Package` for
such a directory, raising `PathNotFound` when the path or its `Zydeco.toml`
is missing and `ProjectNameMismatch` when the directory name differs from
the configured name. Any other existing path is opened as a single-file
package in `root` mode.

## What is not included

The package has no parser, elaborator, type checker or name resolver for
Zydeco source text, and no command-line tool or REPL. `open_package` and
the helpers in `zydeco.modules` only inspect paths and configuration; they
do not read or run `.zy` files. `ParseError` and `ResolveErrors` are
provided as error types but nothing in the package raises them.