from pathlib import Path

from brainrot.interpreter import run_file

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_fibonacci():
    result = run_file(str(EXAMPLES / 'fibonacci.rot'))
    assert result.error is None
    assert result.lines == ['0', '1', '1', '2', '3', '5', '8', '13']
