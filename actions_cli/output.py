"""Tabular output for CLI commands."""

import csv
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Literal, TextIO, TypeAlias

OutputFormat: TypeAlias = Literal["tab", "csv"]

OUTPUT_FORMATS: Sequence[OutputFormat] = ("tab", "csv")

_UNITS = (("d", 86400), ("h", 3600), ("m", 60), ("s", 1))


def format_duration(duration: timedelta) -> str:
    """Format a duration as ``1d 2h 3m 4s``, dropping zero units."""
    remaining = int(duration.total_seconds())
    parts: list[str] = []
    for unit, seconds in _UNITS:
        amount, remaining = divmod(remaining, seconds)
        if amount:
            parts.append(f"{amount}{unit}")
    return " ".join(parts) or "0s"


def format_optional_duration(duration: timedelta | None) -> str:
    return "-" if duration is None else format_duration(duration)


@dataclass(kw_only=True)
class TableWriter:
    """Writes rows as CSV right away, or buffers them for tab alignment.

    Tab-aligned rows need every cell of a column before the first one can be
    padded, so they are only written on :meth:`flush`.
    """

    stream: TextIO
    format: OutputFormat = "tab"
    padding: int = 2
    rows: list[Sequence[str]] = field(default_factory=list)

    def writerow(self, row: Sequence[object]) -> None:
        cells = [str(cell) for cell in row]
        if self.format == "csv":
            csv.writer(self.stream, lineterminator="\n").writerow(cells)
            self.stream.flush()
        else:
            self.rows.append(cells)

    def flush(self) -> None:
        """Write all buffered rows and clear the buffer."""
        self._write_aligned()
        self.rows.clear()
        self.stream.flush()

    def _write_aligned(self) -> None:
        widths: dict[int, int] = {}
        for row in self.rows:
            for index, cell in enumerate(row[:-1]):
                widths[index] = max(widths.get(index, 0), len(cell))

        for row in self.rows:
            cells = [
                cell.ljust(widths[index] + self.padding)
                for index, cell in enumerate(row[:-1])
            ]
            cells.extend(row[-1:])
            self.stream.write("".join(cells) + "\n")
