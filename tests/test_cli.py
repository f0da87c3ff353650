import builtins

import pytest

import scrawl
from scrawl.__main__ import main


def write(tmp_path, name, source):
    path = tmp_path / name
    path.write_text(source, encoding='utf-8')
    return path


def test_runs_a_program(tmp_path, capsys):
    path = write(tmp_path, 'ok.scrawl', 'x = 2; print(x * 21);')
    main([str(path)])
    assert capsys.readouterr().out.strip() == '42'


@pytest.mark.parametrize('source, prefix', [
    ('print(1 + "a");', 'Runtime error: TypeMismatch'),
    ('print(y);', 'Runtime error: VariableNotDefined'),
    ('print(1', 'Error parsing code: UnterminatedSpan'),
    ('x = 1 2;', 'Error parsing code: UnexpectedToken'),
    ('x = @;', 'Error tokenizing code: LexicalError'),
    ('x === 1;', 'Error tokenizing code: UnknownOperator'),
])
def test_errors_exit_with_status_1(tmp_path, capsys, source, prefix):
    path = write(tmp_path, 'bad.scrawl', source)
    with pytest.raises(SystemExit) as info:
        main([str(path)])
    assert info.value.code == 1
    assert capsys.readouterr().err.startswith(prefix)


def test_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as info:
        main([str(tmp_path / 'nope.scrawl')])
    assert info.value.code == 1
    assert 'not found' in capsys.readouterr().err


def test_emit_then_run_ast(tmp_path, capsys, monkeypatch):
    monkeypatch.setattr(builtins, 'input', lambda prompt='': 'Bo')
    path = write(tmp_path, 'greet.scrawl', 'input who; print("hi " + who);')
    main(['--emit-ast', str(path)])
    ast_path = tmp_path / 'greet.scrawl.ast.json'
    assert capsys.readouterr().out.strip() == str(ast_path)
    assert ast_path.exists()

    main(['--ast', str(ast_path)])
    assert capsys.readouterr().out.strip() == 'hi Bo'


def test_bad_ast_file(tmp_path, capsys):
    ast_path = write(tmp_path, 'bad.ast.json', '{"type": "Mystery"}')
    with pytest.raises(SystemExit) as info:
        main(['--ast', str(ast_path)])
    assert info.value.code == 1
    assert capsys.readouterr().err.startswith('Error loading AST:')


def test_verbose_writes_debug_file(tmp_path, capsys, monkeypatch):
    monkeypatch.chdir(tmp_path)
    write(tmp_path, 'loop.scrawl', 'i = 0; while (i < 2) { i += 1; } print(i);')
    main(['-vvvv', 'loop.scrawl'])
    assert capsys.readouterr().out.strip() == '2'

    trace = (tmp_path / 'debug.txt').read_text(encoding='utf-8')
    assert 'push frame -> depth 2' in trace
    assert 'set i = 0 in frame 0' in trace
    assert 'while condition -> false' in trace
    assert '1 + 1 -> 2' in trace
    assert 'finished at frame depth 1' in trace


def test_debug_level_limits_the_trace(tmp_path, capsys, monkeypatch):
    monkeypatch.chdir(tmp_path)
    write(tmp_path, 'p.scrawl', 'x = 1; if (x == 1) { x += 1; }')
    main(['-vv', 'p.scrawl'])
    trace = (tmp_path / 'debug.txt').read_text(encoding='utf-8')
    assert 'set x = 1 in frame 0' in trace
    assert 'push frame' in trace
    assert 'if condition' not in trace
    assert '->' in trace
    assert '1 + 1' not in trace


def test_run_file_returns_the_interpreter(tmp_path, capsys):
    path = write(tmp_path, 'lib.scrawl', 'total = 0; { total += 5; } print(total);')
    interp = scrawl.run_file(str(path))
    assert capsys.readouterr().out.strip() == '5'
    assert interp.env.globals == {'total': 5}


def test_ast_file_with_null_block_body(tmp_path, capsys):
    ast_path = write(
        tmp_path, 'null_body.ast.json',
        '{"type": "Program", "body": [{"type": "WhileStmt",'
        ' "condition": {"type": "Literal", "value": true, "literal_type": "Boolean"}, "body": null}]}',
    )
    with pytest.raises(SystemExit) as info:
        main(['--ast', str(ast_path)])
    assert info.value.code == 1
    assert capsys.readouterr().err.startswith('Error loading AST:')
