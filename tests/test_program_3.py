from pathlib import Path

from scrawl.parser import parse_program
from scrawl.interpreter import Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_3_countdown(capsys):
    source = (EXAMPLES / 'program_3.scrawl').read_text(encoding='utf-8')
    program = parse_program(source)
    interp = Interpreter()
    interp.run(program)
    out = capsys.readouterr().out.strip().split('\n')
    assert out == ['5', '4', '3', '2', '1', 'liftoff']
    # The loop counter was first assigned at top level and stays global.
    assert interp.env.globals == {'i': 0}
