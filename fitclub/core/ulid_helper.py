# fitclub/core/ulid_helper.py
"""Primary keys for scheduling rows: 26-character, time-sortable ULIDs."""

import ulid


def generate_ulid() -> str:
    return str(ulid.ULID())
