"""
Error taxonomy for stock replay.

StockError entries are data: they are accumulated by the parser, loader and
reconciliation engine and written out next to the reconstructed stock.
Exceptions are raised only at the file boundary.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorType(str, Enum):
    """Closed set of error kinds recorded during a replay run."""

    INVALID_FIELD_COUNT = "INVALID_FIELD_COUNT"
    INVALID_EVENT = "INVALID_EVENT"
    INVALID_NUMBER_FORMAT = "INVALID_NUMBER_FORMAT"
    INVALID_DATE_FORMAT = "INVALID_DATE_FORMAT"
    PARSE_ERROR = "PARSE_ERROR"
    WRITE_ERROR = "WRITE_ERROR"
    MOVEMENT_ERROR = "MOVEMENT_ERROR"
    MOVEMENT_ID_OUT_OF_ORDER = "MOVEMENT_ID_OUT_OF_ORDER"


@dataclass(frozen=True)
class StockError:
    """
    Classified error entry.

    Fields:
        type: Error kind
        message: Human-readable description
        source: Offending raw input line (or output path for write errors)
    """
    type: ErrorType
    message: str
    source: str = ""

    @staticmethod
    def invalid_field_count(line: str, expected: int, actual: int) -> "StockError":
        return StockError(
            ErrorType.INVALID_FIELD_COUNT,
            f"Expected {expected} fields but got {actual}",
            line,
        )

    @staticmethod
    def invalid_event(line: str, value: str) -> "StockError":
        return StockError(ErrorType.INVALID_EVENT, f"Invalid event value: {value}", line)

    @staticmethod
    def invalid_number_format(line: str, field_name: str, value: str) -> "StockError":
        return StockError(
            ErrorType.INVALID_NUMBER_FORMAT,
            f"Invalid number format for field '{field_name}': {value}",
            line,
        )

    @staticmethod
    def invalid_date_format(line: str, field_name: str, value: str) -> "StockError":
        return StockError(
            ErrorType.INVALID_DATE_FORMAT,
            f"Invalid date format for field '{field_name}': {value}",
            line,
        )

    @staticmethod
    def parse_error(line: Optional[str], message: str) -> "StockError":
        return StockError(ErrorType.PARSE_ERROR, message, line or "")

    @staticmethod
    def write_error(path: str, message: str) -> "StockError":
        return StockError(ErrorType.WRITE_ERROR, message, path)

    @staticmethod
    def movement_error(message: str, line: Optional[str] = None) -> "StockError":
        return StockError(ErrorType.MOVEMENT_ERROR, message, line or "")

    @staticmethod
    def movement_id_out_of_order(seq: int, line: Optional[str] = None) -> "StockError":
        return StockError(
            ErrorType.MOVEMENT_ID_OUT_OF_ORDER,
            f"Movement ID {seq} out of order",
            line or "",
        )

    def to_dict(self) -> dict:
        return {"type": self.type.value, "message": self.message, "source": self.source}

    def __str__(self) -> str:
        return f"StockError[{self.type.value}: {self.message}]"


class InvalidTransitionError(Exception):
    """Raised when a movement kind has no registered handler."""
    pass


class FieldFormatError(ValueError):
    """Raised by field parsers when a value cannot be converted."""

    def __init__(self, error_type: ErrorType, field_name: str, value: str) -> None:
        super().__init__(f"{field_name}: {value}")
        self.error_type = error_type
        self.field_name = field_name
        self.value = value

    def to_stock_error(self, line: str) -> StockError:
        if self.error_type is ErrorType.INVALID_DATE_FORMAT:
            return StockError.invalid_date_format(line, self.field_name, self.value)
        return StockError.invalid_number_format(line, self.field_name, self.value)


class SnapshotReadError(Exception):
    """Raised when the stock snapshot file cannot be read."""
    pass


class JournalReadError(Exception):
    """Raised when the movement journal cannot be opened or read."""
    pass


class OutputWriteError(Exception):
    """Raised when result files cannot be written."""

    def __init__(self, error: StockError) -> None:
        super().__init__(error.message)
        self.error = error
