"""Result model for product imports."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ImportResult:
    """
    Outcome of one spreadsheet import.

    Attributes:
        source: File name or other label of what was imported
        total_rows: Data rows read (header excluded)
        inserted: Records the store accepted
        skipped_rows: 1-based data-row numbers that were entirely blank
        duration_seconds: Time spent coercing and inserting
        error_message: Store failure message, if the insert failed
    """

    source: Optional[str] = None
    total_rows: int = 0
    inserted: int = 0
    skipped_rows: List[int] = field(default_factory=list)
    duration_seconds: float = 0.0
    error_message: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error_message is None

    @property
    def summary(self) -> str:
        if not self.succeeded:
            return f"Error inserting data: {self.error_message}"
        return f"Products uploaded successfully! Total: {self.inserted}"
