from __future__ import annotations

from pathlib import Path


def load_sequence(source_path: Path) -> str:
    """Read a sequence stored across one or more lines of a text file.

    Line terminators are dropped and the lines are concatenated in order.
    """

    source_path = source_path.expanduser().resolve()
    if not source_path.exists():
        raise FileNotFoundError(f"Sequence file not found: {source_path}")
    with source_path.open(encoding="utf-8") as handle:
        return "".join(line.rstrip("\r\n") for line in handle)
