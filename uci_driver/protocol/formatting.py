"""
UCI Command Formatting

Pure functions that turn Python values into UCI command text. Nothing here
talks to an engine; invalid input raises ValueError before anything is sent.

Formats:
    setoption name <name> value <value>
    position startpos [moves <m1> <m2> ...]
    position fen <fen> [moves <m1> <m2> ...]
    go movetime <ms>
    go depth <plies>

Values are not escaped. UCI has no quoting, so whitespace inside an option
value reaches the engine exactly as given. Line breaks would split the
command in two and are rejected.
"""

from typing import Iterable, List, Optional, Union

import chess

from uci_driver.config import SearchBudget

MoveLike = Union[str, chess.Move]
PositionLike = Union[str, chess.Board]


def _check_single_line(label: str, text: str) -> None:
    if "\n" in text or "\r" in text:
        raise ValueError(f"{label} must not contain line breaks: {text!r}")


def format_value(value) -> str:
    """
    Render an option value as UCI text.

    Booleans become "true"/"false" (UCI check options), everything else
    goes through str().
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def format_option(name: str, value) -> str:
    """
    Build a setoption command (without newline).

    Args:
        name: Option name, e.g. "Skill Level"
        value: Option value; whitespace is kept verbatim

    Returns:
        "setoption name <name> value <value>"

    Raises:
        ValueError: If name is empty or either part contains a line break
    """
    value = format_value(value)

    if not name or not name.strip():
        raise ValueError("Option name must not be empty")
    _check_single_line("Option name", name)
    _check_single_line("Option value", value)

    return f"setoption name {name} value {value}"


def format_move(move: MoveLike) -> str:
    """
    Normalize one move to coordinate notation.

    Only the shape of the move is checked (e.g. "e2e4", "e7e8q"), never
    whether it is legal.

    Raises:
        ValueError: If the move is not coordinate notation
    """
    if isinstance(move, chess.Move):
        return move.uci()

    text = str(move).strip()
    # from_uci raises InvalidMoveError, a ValueError subclass
    chess.Move.from_uci(text)
    return text


def format_fen(position: PositionLike) -> str:
    """Return the FEN for a board, or the stripped FEN string."""
    if isinstance(position, chess.Board):
        return position.fen()

    fen = str(position).strip()
    if not fen:
        raise ValueError("FEN must not be empty")
    _check_single_line("FEN", fen)
    return fen


def format_position(
    fen: Optional[PositionLike] = None,
    moves: Iterable[MoveLike] = (),
) -> str:
    """
    Build a position command (without newline).

    Args:
        fen: Starting position; None means the standard start position
        moves: Moves played from that position, in order

    Returns:
        "position startpos ..." or "position fen <fen> ...", with a
        "moves" segment only when at least one move is given
    """
    move_list: List[str] = [format_move(move) for move in moves]

    if fen is None:
        command = "position startpos"
    else:
        command = f"position fen {format_fen(fen)}"

    if move_list:
        command += " moves " + " ".join(move_list)

    return command


def format_go(budget: SearchBudget) -> str:
    """Build the go command for a search budget."""
    if budget.is_depth:
        return f"go depth {budget.depth}"
    return f"go movetime {budget.movetime}"
