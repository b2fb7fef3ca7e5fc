"""Spreadsheet and CSV rendering of lead lists."""

import csv
import io
import re
from typing import Any, Dict, Iterable, List

from leadfinder.models import Lead

EXPORT_HEADERS = [
    "Business Name",
    "Business Type",
    "Owner Name",
    "Email",
    "Phone",
    "Website",
    "Address",
    "Description",
    "Verification Score",
]


def to_rows(leads: Iterable[Lead]) -> List[List[Any]]:
    rows: List[List[Any]] = []
    for lead in leads:
        contact = lead.contact_details
        rows.append(
            [
                lead.business_name,
                lead.business_type,
                lead.owner_name,
                contact.email,
                contact.phone,
                contact.website,
                lead.address,
                lead.description,
                lead.verification_score,
            ]
        )
    return rows


def to_sheet_values(leads: Iterable[Lead]) -> List[List[Any]]:
    return [list(EXPORT_HEADERS), *to_rows(leads)]


def to_csv(leads: Iterable[Lead]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)
    writer.writerows(to_rows(leads))
    return buffer.getvalue()


def read_csv(text: str) -> List[Dict[str, Any]]:
    records = []
    for row in csv.DictReader(io.StringIO(text)):
        score = row.get("Verification Score") or "0"
        row["Verification Score"] = int(score)
        records.append(row)
    return records


def _filename_part(value: str) -> str:
    return re.sub(r"[^A-Za-z0-9]+", "_", value).strip("_") or "All"


def export_filename(sector: str, location: str) -> str:
    return f"Lead_Generation_{_filename_part(sector)}_in_{_filename_part(location)}.csv"
