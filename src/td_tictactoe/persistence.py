"""Reading and writing value estimates files.

File layout (plain text, one record per line)::

    epsilon: 0.08, alpha: 0.1
    [_________] 0.5
    [A___B____] 0.55

The header records the hyperparameters the table was trained with. Each
following line is a bracketed board encoding and its value separated by a
single space. Existing files are never overwritten.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Tuple, Union

from td_tictactoe.board import Board
from td_tictactoe.exceptions import (
    BoardEncodingError,
    EstimatesParseError,
    EstimatesReadError,
    PersistenceConflictError,
)

HEADER_PATTERN = re.compile(r"^epsilon: (?P<epsilon>\S+), alpha: (?P<alpha>\S+)$")


@dataclass
class EstimatesFile:
    """Contents of an estimates file."""

    epsilon: float
    alpha: float
    entries: List[Tuple[Board, float]] = field(default_factory=list)


def format_header(epsilon: float, alpha: float) -> str:
    return f"epsilon: {float(epsilon)!r}, alpha: {float(alpha)!r}"


def save_estimates(
    path: Union[str, Path],
    epsilon: float,
    alpha: float,
    entries: Iterable[Tuple[Board, float]],
) -> Path:
    """
    Write a header and one line per entry to a new file.

    Args:
        path: Destination file, which must not exist yet
        epsilon: Exploration rate recorded in the header
        alpha: Step size recorded in the header
        entries: (board, value) pairs in the order they should be written

    Returns:
        The path written

    Raises:
        PersistenceConflictError: If path already exists
    """
    path = Path(path)
    try:
        with open(path, "x", encoding="utf-8") as f:
            f.write(format_header(epsilon, alpha) + "\n")
            for board, value in entries:
                f.write(f"{board} {float(value)!r}\n")
    except FileExistsError as e:
        raise PersistenceConflictError(
            f"Estimates file '{path}' already exists"
        ) from e
    return path


def load_estimates(path: Union[str, Path]) -> EstimatesFile:
    """
    Load an estimates file.

    Raises:
        EstimatesReadError: If the file cannot be opened or read
        EstimatesParseError: If the header or any entry line is malformed
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise EstimatesReadError(f"Failed to read estimates file '{path}': {e}") from e

    if not lines:
        raise EstimatesParseError(f"{path}:1: missing header")

    epsilon, alpha = _parse_header(path, lines[0])
    estimates = EstimatesFile(epsilon=epsilon, alpha=alpha)

    # Trailing blank lines are allowed, blank lines in the middle are not
    while len(lines) > 1 and not lines[-1].strip():
        lines.pop()

    for lineno, line in enumerate(lines[1:], start=2):
        estimates.entries.append(_parse_entry(path, lineno, line))

    return estimates


def _parse_header(path: Path, line: str) -> Tuple[float, float]:
    match = HEADER_PATTERN.match(line.strip())
    if match is None:
        raise EstimatesParseError(f"{path}:1: malformed header {line!r}")
    try:
        epsilon, alpha = float(match.group("epsilon")), float(match.group("alpha"))
    except ValueError as e:
        raise EstimatesParseError(f"{path}:1: non-numeric hyperparameter in {line!r}") from e

    if not 0.0 <= epsilon <= 1.0:
        raise EstimatesParseError(f"{path}:1: epsilon {epsilon} is outside [0, 1]")
    if not 0.0 < alpha <= 1.0:
        raise EstimatesParseError(f"{path}:1: alpha {alpha} is outside (0, 1]")
    return epsilon, alpha


def _parse_entry(path: Path, lineno: int, line: str) -> Tuple[Board, float]:
    parts = line.split(" ")
    if len(parts) != 2:
        raise EstimatesParseError(f"{path}:{lineno}: expected '<board> <value>', got {line!r}")

    encoded, raw_value = parts
    try:
        board = Board.decode(encoded)
    except BoardEncodingError as e:
        raise EstimatesParseError(f"{path}:{lineno}: {e}") from e

    try:
        value = float(raw_value)
    except ValueError as e:
        raise EstimatesParseError(f"{path}:{lineno}: non-numeric value {raw_value!r}") from e
    if not 0.0 <= value <= 1.0:
        raise EstimatesParseError(f"{path}:{lineno}: value {value} is outside [0, 1]")

    return board, value
