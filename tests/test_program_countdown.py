from pathlib import Path

from brainrot.interpreter import run_file

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_countdown():
    result = run_file(str(EXAMPLES / 'countdown.rot'))
    assert result.error is None
    assert result.lines == [
        'Countdown: 5',
        'Countdown: 4',
        'Countdown: 3',
        'Countdown: 2',
        'Countdown: 1',
        'BRAIN ROT COMPLETE!',
    ]
