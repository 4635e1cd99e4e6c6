"""
CSV record loader.
Reads one side of a reconciliation from a delimited file and scales the
amount column to minor units.
"""

from pathlib import Path
from typing import Any
import logging

import pandas as pd

from ..config import ReconConfig
from ..models.record import Record
from ..utils.amounts import to_scaled
from ..utils.exceptions import (
    AmountOverflowError,
    ReconciliationError,
    RecordParseError,
)

logger = logging.getLogger(__name__)


class RecordParser:
    """
    Parser for side files with an id column and an amount column.

    Every cell is read as text so amounts never pass through a float.
    """

    def __init__(self, config: ReconConfig):
        """
        Initialize the parser with configuration.

        Args:
            config: Application configuration object
        """
        self.config = config
        self.id_column = config.input.column_mappings.get("id", "id")
        self.amount_column = config.input.column_mappings.get("amount", "amount")
        self.scale = config.matching.scale

    def parse_file(self, file_path: Path) -> list[Record]:
        """
        Parse a side file and return its records in file order.

        Args:
            file_path: Path to the CSV file

        Returns:
            List of records

        Raises:
            RecordParseError: If the file cannot be read or a row is invalid
        """
        logger.info(f"Parsing side file: {file_path}")

        try:
            df = pd.read_csv(
                file_path,
                encoding=self.config.input.encoding,
                delimiter=self.config.input.delimiter,
                dtype=str,
                keep_default_na=False,
                skipinitialspace=True,
            )
        except Exception as e:
            logger.error(f"Failed to read CSV file: {e}")
            raise RecordParseError(f"Failed to read CSV file {file_path}: {e}") from e

        records = self.parse_dataframe(df)
        logger.info(f"Extracted {len(records)} records from {file_path}")

        return records

    def parse_dataframe(self, df: pd.DataFrame) -> list[Record]:
        """
        Convert DataFrame rows to records.

        Args:
            df: DataFrame with string cells

        Returns:
            List of records in row order
        """
        missing = [
            col for col in (self.id_column, self.amount_column) if col not in df.columns
        ]
        if missing:
            raise RecordParseError(
                f"Missing column(s) {missing}; found {list(df.columns)}"
            )

        records: list[Record] = []
        seen_ids: set[int] = set()

        for idx, row in df.iterrows():
            # Header is line 1, so data row 0 is line 2
            line = int(idx) + 2
            try:
                record = Record(
                    id=self._parse_id(row[self.id_column]),
                    amount=self._parse_amount(row[self.amount_column]),
                )
            except AmountOverflowError as e:
                logger.error(f"Line {line}: {e}")
                raise AmountOverflowError(f"Line {line}: {e}") from e
            except (ReconciliationError, ValueError, TypeError) as e:
                logger.error(f"Line {line}: {e}")
                raise RecordParseError(f"Line {line}: {e}") from e

            if record.id in seen_ids:
                logger.warning(f"Line {line}: duplicate id {record.id}")
            seen_ids.add(record.id)
            records.append(record)

        return records

    def _parse_id(self, value: Any) -> int:
        text = str(value).strip()
        if not text:
            raise ValueError("empty id")
        return int(text)

    def _parse_amount(self, value: Any) -> int:
        """
        Parse an amount cell to minor units.

        Currency symbols and thousands separators are stripped; a value in
        parentheses is treated as negative.
        """
        text = str(value).replace("$", "").replace(",", "").strip()
        if not text:
            raise ValueError("empty amount")
        if text.startswith("(") and text.endswith(")"):
            text = "-" + text[1:-1].strip()
        return to_scaled(text, self.scale)
