"""
Tests for variable scoping: frames, reads and the write rule.
"""
import pytest

from scrawl.environment import Environment
from scrawl.errors import VariableNotDefinedError, TypeMismatchError
from scrawl.interpreter import Interpreter, run_program
from scrawl.parser import parse_program


def test_block_overwrites_outer_binding(capsys):
    run_program('a = 1; { a = 2; } print(a);')
    assert capsys.readouterr().out.strip() == '2'


def test_new_name_in_block_lands_in_global_frame(capsys):
    interp = run_program('{ b = 3; } print(b);')
    assert capsys.readouterr().out.strip() == '3'
    assert interp.env.globals == {'b': 3}


def test_undefined_variable():
    with pytest.raises(VariableNotDefinedError) as info:
        run_program('print(c);')
    assert info.value.name == 'c'
    assert str(info.value) == 'VariableNotDefined: variable c is not defined'


def test_deeply_nested_overwrite(capsys):
    run_program(
        'n = 0;'
        'while (n < 2) { if (true) { { n += 1; } } }'
        'print(n);'
    )
    assert capsys.readouterr().out.strip() == '2'


def test_frames_are_popped_after_each_block():
    interp = run_program('i = 0; while (i < 3) { i += 1; { x = i; } } if (true) { }')
    assert interp.env.depth == 1
    assert interp.env.globals == {'i': 3, 'x': 3}


def test_frames_are_popped_when_an_error_escapes():
    interp = Interpreter()
    with pytest.raises(TypeMismatchError):
        interp.run(parse_program('{ if (true) { while (true) { x = 1 + "a"; } } }'))
    assert interp.env.depth == 1

    # The same interpreter keeps working after the failure.
    interp.run(parse_program('{ y = 2; }'))
    assert interp.env.get('y') == 2
    assert interp.env.depth == 1


def test_environment_reads_innermost_first():
    env = Environment()
    env.set('a', 1)
    env.push()
    env.frames[-1]['a'] = 2
    assert env.get('a') == 2
    env.pop()
    assert env.get('a') == 1


def test_environment_overwrites_where_the_binding_lives():
    env = Environment()
    env.push()
    env.frames[-1]['a'] = 'inner'
    env.push()
    assert env.set('a', 'changed') == 1
    assert env.set('fresh', True) == 0
    assert env.frames == [{'fresh': True}, {'a': 'changed'}, {}]


def test_environment_cannot_pop_global_frame():
    env = Environment()
    with pytest.raises(IndexError):
        env.pop()
    assert env.depth == 1
