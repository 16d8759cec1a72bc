"""
Result writer: reconstructed stock and error log as CSV files.
"""

import contextlib
import csv
import datetime
import os
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from ..core.errors import OutputWriteError, StockError
from ..core.fields import format_value
from ..core.state import StockLine
from ..logging_config import get_logger
from ..query import sorted_lines
from .columns import COLUMN_NAMES

TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


@dataclass(frozen=True)
class ResultPaths:
    stock_file: str
    error_file: str


def stock_line_to_csv(line: StockLine) -> str:
    """Render a line in snapshot column order (same dialect the loader reads)."""
    return ",".join(format_value(line.get(name)) for name in COLUMN_NAMES)


def write_results(
    stock: Mapping[Optional[int], StockLine],
    errors: Iterable[StockError],
    directory: str,
    now: Optional[datetime.datetime] = None,
) -> ResultPaths:
    """
    Write `stocks_<ts>.csv` and `errors_<ts>.csv` into directory.

    Args:
        stock: Final stock map
        errors: Error entries in detection order
        directory: Output directory (created if missing)
        now: Timestamp for file names (default: current local time)

    Returns:
        ResultPaths of both files

    Raises:
        OutputWriteError: If the directory or a file cannot be written
    """
    logger = get_logger(__name__, trace_id=directory)
    timestamp = (now or datetime.datetime.now()).strftime(TIMESTAMP_FORMAT)
    paths = ResultPaths(
        stock_file=os.path.join(directory, f"stocks_{timestamp}.csv"),
        error_file=os.path.join(directory, f"errors_{timestamp}.csv"),
    )

    # Both files go to temporary names first; a failed run leaves neither behind.
    pending = [(paths.stock_file + ".tmp", paths.stock_file), (paths.error_file + ".tmp", paths.error_file)]
    published = []
    try:
        os.makedirs(directory, exist_ok=True)

        with open(pending[0][0], "w", encoding="utf-8", newline="") as f:
            for line in sorted_lines(stock):
                f.write(stock_line_to_csv(line))
                f.write("\n")

        with open(pending[1][0], "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f, lineterminator="\n")
            for error in errors:
                writer.writerow([error.type.value, error.message, error.source])

        for tmp_path, final_path in pending:
            os.replace(tmp_path, final_path)
            published.append(final_path)
    except OSError as ex:
        for path in [tmp for tmp, _ in pending] + published:
            with contextlib.suppress(OSError):
                os.remove(path)
        raise OutputWriteError(
            StockError.write_error(directory, f"Failed to write output files: {ex}")
        ) from ex

    logger.info(f"Wrote {len(stock)} stock lines to {paths.stock_file}")
    return paths
