"""Helpers for the JSON record collections kept in the key-value store."""
import random
import string
import time
from datetime import datetime, timezone

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_id():
    """``<millisecond timestamp>-<9 random base36 chars>``."""
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"{int(time.time() * 1000)}-{suffix}"


def utc_now_iso():
    """ISO-8601 UTC timestamp with millisecond precision and a trailing Z."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def find_index(records, record_id, field="id"):
    for index, record in enumerate(records):
        if record.get(field) == record_id:
            return index
    return -1


def filter_records(records, exact=None, search=None, search_fields=("title", "description")):
    """
    Filter a collection in memory, keeping its order.

    ``exact`` maps field -> wanted value; empty values and "All" are ignored.
    ``search`` is a case-insensitive substring match over ``search_fields``.
    """
    result = list(records)

    for field, wanted in (exact or {}).items():
        if wanted in (None, "", "All"):
            continue
        result = [r for r in result if r.get(field) == wanted]

    if search:
        needle = search.lower()
        result = [
            r for r in result
            if any(needle in str(r.get(f) or "").lower() for f in search_fields)
        ]

    return result


def merge_fields(record, changes, allowed):
    """Shallow-merge the ``allowed`` fields present in ``changes`` into ``record``."""
    for field in allowed:
        if field in changes:
            record[field] = changes[field]
    return record
