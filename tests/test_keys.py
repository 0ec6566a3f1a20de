import subprocess
import sys
from pathlib import Path

from oatmeal.keys import ESC, Key, KeyKind


ROOT = Path(__file__).resolve().parent.parent


def test_key_constructors():
    assert Key.of('n') == Key(KeyKind.CHAR, 'n')
    assert Key.ctrl('c') == Key(KeyKind.CTRL, 'c')
    assert Key.alt('x').kind is KeyKind.ALT
    assert ESC == Key(KeyKind.ESC)


def test_game_core_imports_without_blessed():
    code = (
        "import sys\n"
        "sys.modules['blessed'] = None\n"
        "import oatmeal.keys, oatmeal.engine, oatmeal.levels\n"
    )
    result = subprocess.run(
        [sys.executable, '-c', code],
        cwd=str(ROOT), capture_output=True, text=True,
    )
    assert result.returncode == 0, result.stderr
