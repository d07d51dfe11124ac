"""Reading batch account-opening requests from CSV files."""

import csv
from dataclasses import dataclass, field
from pathlib import Path

from bankledger.domain.entities import AccountSpec
from bankledger.utils.amount_parser import parse_amount

REQUIRED_COLUMNS = ("type", "name", "balance")
PARAM_COLUMN = "param"


@dataclass
class SpecFile:
    """Account specs parsed from a file, plus the rows that could not be read."""

    specs: list[AccountSpec] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


def read_account_specs(csv_file_path: str) -> SpecFile:
    """Parse a batch file into account specs.

    The file needs a header with ``type``, ``name`` and ``balance`` columns
    and may add ``param`` (interest rate for savings, overdraft limit for
    current accounts). The type tag is passed through unchecked so the
    ledger reports unknown types per item.

    Rows with unparseable amounts or a missing name are listed in
    ``errors`` and left out of ``specs``.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the header lacks a required column
    """
    csv_path = Path(csv_file_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"Batch file not found: {csv_file_path}")

    result = SpecFile()
    with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)
        if reader.fieldnames is None:
            raise ValueError("Batch file has no columns")

        columns = {name.strip().lower(): name for name in reader.fieldnames}
        missing = [col for col in REQUIRED_COLUMNS if col not in columns]
        if missing:
            raise ValueError(f"Batch file missing required columns: {', '.join(missing)}")

        for row_num, row in enumerate(reader, start=2):  # Start at 2 (header is row 1)
            values = {
                key: (row.get(original) or "").strip()
                for key, original in columns.items()
            }

            if not values["name"]:
                result.errors.append(f"Row {row_num}: Missing name")
                continue

            try:
                balance = parse_amount(values["balance"])
                param_text = values.get(PARAM_COLUMN, "")
                param = parse_amount(param_text) if param_text else None
            except ValueError as e:
                result.errors.append(f"Row {row_num}: {e}")
                continue

            result.specs.append(
                AccountSpec(
                    kind=values["type"],
                    holder_name=values["name"],
                    initial_balance=balance,
                    variant_param=param,
                )
            )

    return result
