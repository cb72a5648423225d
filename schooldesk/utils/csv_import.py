# utils/csv_import.py
"""
Student roster import.

Columns are positional: first name, last name, optional email. Anything
after the email column is dropped. The first line is a header and is
ignored whatever it says.
"""
import io
import re
import time
from typing import Dict, List, Optional

import pandas as pd

from schooldesk.core.config import get_csv_import_settings
from schooldesk.core.errors import ValidationError
from schooldesk.core.logging import logger

COLUMNS = ["first_name", "last_name", "email"]


def _slug(value: str) -> str:
    return re.sub(r"[^a-z0-9]+", "", value.lower())


def generated_email(first_name: str, last_name: str, stamp: int, domain: str) -> str:
    """firstname.lastname.<stamp>@domain; a placeholder last name is left out"""
    parts = [_slug(first_name), _slug(last_name), str(stamp)]
    return ".".join(part for part in parts if part) + f"@{domain}"


def _first_columns(fields: List[str]) -> List[str]:
    # Columns past the email are ignored
    return fields[:len(COLUMNS)]


def read_rows(text: str, skip_header: bool = True) -> pd.DataFrame:
    try:
        frame = pd.read_csv(
            io.StringIO(text),
            engine="python",
            header=None,
            names=COLUMNS,
            index_col=False,
            on_bad_lines=_first_columns,
            skiprows=1 if skip_header else 0,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        return pd.DataFrame(columns=COLUMNS)
    except pd.errors.ParserError as e:
        logger.warning(f"Rejected student CSV: {e}")
        raise ValidationError("Could not parse CSV file: expected first_name,last_name[,email] columns")
    return frame.fillna("")


def parse_student_csv(
    text: str,
    skip_header: bool = True,
    last_name_placeholder: Optional[str] = None,
    generate_email: Optional[bool] = None,
    email_domain: Optional[str] = None,
) -> List[Dict[str, Optional[str]]]:
    """
    Turn CSV text into student field dicts.

    Fields are trimmed, a missing last name becomes the placeholder and rows
    without a first name are dropped. Settings supply any option not passed.
    """
    options = get_csv_import_settings()
    if last_name_placeholder is None:
        last_name_placeholder = options["last_name_placeholder"]
    if generate_email is None:
        generate_email = options["generate_email"]
    if email_domain is None:
        email_domain = options["email_domain"]

    stamp = int(time.time() * 1000)
    students = []
    for row in read_rows(text, skip_header).itertuples(index=False):
        first_name = str(row.first_name).strip()
        if not first_name:
            continue
        last_name = str(row.last_name).strip() or last_name_placeholder
        email = str(row.email).strip() or None
        if email is None and generate_email:
            email = generated_email(
                first_name,
                "" if last_name == last_name_placeholder else last_name,
                stamp + len(students),
                email_domain,
            )
        students.append({
            "first_name": first_name,
            "last_name": last_name,
            "email": email,
        })
    return students
