import logging
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np

log = logging.getLogger(__name__)

N_COLUMNS = 4


class StripDataError(ValueError):
    """Raised when a strip data file has malformed content."""


@dataclass(frozen=True)
class StripData:
    """Charge-scan profile of one strip, in file order."""

    position: np.ndarray
    position_error: np.ndarray
    charge: np.ndarray
    charge_error: np.ndarray
    source: Path = field(default=None, compare=False)

    def __post_init__(self):
        n = len(self.position)
        for name in ("position_error", "charge", "charge_error"):
            if len(getattr(self, name)) != n:
                raise ValueError(
                    f"column '{name}' has {len(getattr(self, name))} values, "
                    f"expected {n}"
                )

    def __len__(self) -> int:
        return len(self.position)

    @property
    def n_points(self) -> int:
        """Number of data rows read from the file."""
        return len(self.position)


def _parse_field(text: str, path: Path, lineno: int, col: int) -> float:
    try:
        value = float(text)
    except ValueError:
        raise StripDataError(
            f"{path}:{lineno}: field {col + 1} is not a number: {text.strip()!r}"
        ) from None
    if not np.isfinite(value):
        raise StripDataError(
            f"{path}:{lineno}: field {col + 1} is not finite: {text.strip()!r}"
        )
    return value


def read_strip_file(path) -> StripData:
    """
    Read a charge-scan text file.

    The first line is a header and is skipped. Every other non-blank line
    must hold exactly four comma-separated numbers:
        position, position error, normalized charge, charge error

    A malformed line aborts the whole read with StripDataError; no partial
    data is ever returned. A missing file raises the usual OSError.
    """
    path = Path(path)
    rows = []

    try:
        with path.open("r", encoding="utf-8") as fh:
            lines = fh.readlines()
    except UnicodeDecodeError as exc:
        raise StripDataError(
            f"{path}: not valid UTF-8 text (byte {exc.start}: {exc.reason})"
        ) from exc

    for lineno, line in enumerate(lines[1:], start=2):
        if not line.strip():
            log.debug("%s:%d: blank line skipped", path, lineno)
            continue
        items = line.split(",")
        if len(items) != N_COLUMNS:
            raise StripDataError(
                f"{path}:{lineno}: expected {N_COLUMNS} fields, "
                f"got {len(items)}"
            )
        rows.append([_parse_field(item, path, lineno, col)
                     for col, item in enumerate(items)])

    if not rows:
        raise StripDataError(f"{path}: no data rows after the header")

    cols = np.array(rows, dtype=float).T
    data = StripData(
        position=cols[0],
        position_error=cols[1],
        charge=cols[2],
        charge_error=cols[3],
        source=path,
    )
    log.debug("%s: %d data points", path, data.n_points)
    return data
