from pathlib import Path

from brainrot.interpreter import run_file

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_logic():
    result = run_file(str(EXAMPLES / 'logic.rot'))
    assert result.to_dict() == {'lines': ['Brain rot detected!', 'Double brain rot!']}
