"""CLI entry point for the Scrawl interpreter.

Usage:
    python -m scrawl [-v|-vv|-vvv|-vvvv] <program_file>
    python -m scrawl [-v...] --emit-ast <program_file>
    python -m scrawl [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .scrawl file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. Any lexical, syntax or runtime error is
reported on stderr and the process exits with status 1.
"""

import argparse
import json
import sys
from pathlib import Path
from .ast_json import ast_to_obj, ast_from_obj
from .errors import LexicalError, ParseError, ExecutionError
from .interpreter import Interpreter
from .parser import parse_program


def read_source(program_file: Path) -> str:
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(1)
    with open(program_file, 'r', encoding='utf-8') as f:
        return f.read()


def parse_or_exit(source: str):
    try:
        return parse_program(source)
    except LexicalError as e:
        print(f"Error tokenizing code: {e}", file=sys.stderr)
    except ParseError as e:
        print(f"Error parsing code: {e}", file=sys.stderr)
    sys.exit(1)


def run_or_exit(program, debug_level: int) -> None:
    interpreter = Interpreter(debug_level=debug_level)
    try:
        interpreter.run(program)
    except ExecutionError as e:
        print(f"Runtime error: {e}", file=sys.stderr)
        sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='scrawl', description="Scrawl language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='SCRAWL_FILE', help='emit AST JSON for the given .scrawl file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Scrawl program file (.scrawl) to execute')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        program = parse_or_exit(read_source(program_file))
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(ast_to_obj(program), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        if not ast_path.exists():
            print(f"Error: file {ast_path} not found", file=sys.stderr)
            sys.exit(1)
        with open(ast_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        try:
            program = ast_from_obj(data)
        except (ParseError, ValueError, TypeError, KeyError) as e:
            print(f"Error loading AST: {e}", file=sys.stderr)
            sys.exit(1)
        run_or_exit(program, args.v)
        return

    # Default: execute source file
    if not args.program:
        parser.error('missing program file; or use --emit-ast/--ast')
    program = parse_or_exit(read_source(Path(args.program)))
    run_or_exit(program, args.v)


if __name__ == '__main__':
    main()
