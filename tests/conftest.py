"""
Shared fixtures.

fake_engine writes a tiny UCI engine in Python to tmp_path. It answers
uci/isready/setoption/position/go/d the way Stockfish does, and takes an
optional mode argument:
    --hang-on-go   never answers go
    --exit-on-go   exits with code 3 on go
"""

import sys
import textwrap

import pytest


FAKE_ENGINE = textwrap.dedent(
    """
    import sys
    import time

    mode = sys.argv[1] if len(sys.argv) > 1 else ""
    position = "none"

    def say(*lines):
        for line in lines:
            sys.stdout.write(line + "\\n")
        sys.stdout.flush()

    say("FakeEngine 1.0 by the test suite")

    while True:
        line = sys.stdin.readline()
        if not line:
            break
        command = line.strip()

        if command == "uci":
            say(
                "id name FakeEngine 1.0",
                "id author Test Suite",
                "option name Skill Level type spin default 20 min 0 max 20",
                "uciok",
            )
        elif command == "isready":
            say("readyok")
        elif command.startswith("setoption name "):
            name = command[len("setoption name "):].split(" value ")[0]
            if name != "Skill Level":
                say("No such option: " + name)
        elif command.startswith("position "):
            position = command
        elif command.startswith("go "):
            if mode == "--hang-on-go":
                time.sleep(60)
            elif mode == "--exit-on-go":
                sys.exit(3)
            say("info depth 1 score cp 13 pv e2e4", "info string " + command)
            say("bestmove e2e4 ponder e7e5")
        elif command == "d":
            say("Position: " + position)
        elif command == "quit":
            break
    """
)


@pytest.fixture
def fake_engine(tmp_path):
    """Path to an executable fake UCI engine."""
    path = tmp_path / "fake_engine.py"
    path.write_text(f"#!{sys.executable}\n{FAKE_ENGINE}")
    path.chmod(0o755)
    return str(path)
