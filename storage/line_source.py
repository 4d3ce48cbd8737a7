from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union


@contextmanager
def open_lines(
    path: Union[str, Path], encoding: str = "utf-8"
) -> Iterator[Iterator[str]]:
    """Yield the lines of a text file as a streaming iterator.

    Each line is decoded on its own, so a ``UnicodeDecodeError`` surfaces
    while iterating the line that holds the bad bytes. Lines keep their
    terminators; ``OSError`` from opening or reading the file propagates.
    """

    with Path(path).open("rb") as handle:
        yield (raw.decode(encoding) for raw in handle)
