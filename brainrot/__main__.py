"""CLI entry point for the BrainRot interpreter.

Usage:
    python -m brainrot [-v|-vv|-vvv] [--strict] <program_file>
    python -m brainrot [-v...] --emit-ast <program_file>
    python -m brainrot [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .rot file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file
  --max-steps   Step budget for the run (0 disables the limit)
  --max-depth   Maximum function call depth (0 disables the limit)
  --strict      Report the first malformed statement instead of skipping it

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. Printed output goes to stdout; an error
ends the run with exit status 1 and a message on stderr.
"""

import argparse
import json
import sys
from pathlib import Path

from .ast_json import ast_to_obj, program_from_obj
from .errors import BrainrotError
from .interpreter import (
    DEFAULT_MAX_CALL_DEPTH, DEFAULT_MAX_STEPS, ExecutionResult, Interpreter, execute,
)
from .parser import parse_program


def _limit(value: int):
    return value if value > 0 else None


def _read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def _report(result: ExecutionResult) -> None:
    for line in result.lines:
        print(line)
    if result.error is not None:
        print(str(result.error), file=sys.stderr)
        sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='brainrot', description="BrainRot language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='ROT_FILE', help='emit AST JSON for the given .rot file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('--max-steps', type=int, default=DEFAULT_MAX_STEPS,
                        help=f'step budget for the run, 0 for unlimited (default {DEFAULT_MAX_STEPS})')
    parser.add_argument('--max-depth', type=int, default=DEFAULT_MAX_CALL_DEPTH,
                        help=f'maximum call depth, 0 for unlimited (default {DEFAULT_MAX_CALL_DEPTH})')
    parser.add_argument('--strict', action='store_true', help='fail on the first malformed statement')
    parser.add_argument('program', nargs='?', help='BrainRot program file (.rot) to execute')
    args = parser.parse_args(argv)

    options = dict(
        debug_level=args.v,
        max_steps=_limit(args.max_steps),
        max_call_depth=_limit(args.max_depth),
        strict=args.strict,
    )

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = _read_source(program_file)
        with Interpreter(**options) as interpreter:
            try:
                ast_program = parse_program(source, on_failure=interpreter.report_parse_failure)
            except BrainrotError as e:
                print(str(e.err), file=sys.stderr)
                sys.exit(1)
        obj = ast_to_obj(ast_program)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(obj, out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        source = _read_source(ast_path)
        try:
            ast_program = program_from_obj(json.loads(source))
        except (KeyError, TypeError, ValueError) as e:
            print(f"Error: invalid AST file {ast_path}: {e}", file=sys.stderr)
            sys.exit(1)
        with Interpreter(**options) as interpreter:
            result = interpreter.run(ast_program)
        _report(result)
        return

    # Default: execute source file
    if not args.program:
        parser.error('missing program file; or use --emit-ast/--ast')
    source = _read_source(Path(args.program))
    _report(execute(source, **options))


if __name__ == '__main__':
    main()
