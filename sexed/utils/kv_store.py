"""
Key-value store backed by the ``kv_store`` table.

Values are whole JSON documents. Plain ``set`` replaces a value outright
(last writer wins); ``update`` and ``update_many`` run a read-modify-write
cycle whose writes are checked against the version that was read, so a
request that loses a race is retried from a fresh read instead of silently
dropping the other request's change.
"""
from datetime import datetime

from flask import current_app
from sqlalchemy import delete as sql_delete
from sqlalchemy import insert as sql_insert
from sqlalchemy import select
from sqlalchemy import update as sql_update
from sqlalchemy.exc import IntegrityError

from sexed.extensions import db
from sexed.models.kv_entry import KVEntry
from sexed.utils.errors import ConcurrentUpdateError

DEFAULT_MAX_ATTEMPTS = 3


def get_versioned(key):
    """Return ``(value, version)``; an absent key reads as ``(None, 0)``."""
    row = db.session.execute(
        select(KVEntry.value, KVEntry.version).where(KVEntry.key == key)
    ).first()
    if row is None:
        return None, 0
    return row.value, row.version


def get(key, default=None):
    value, version = get_versioned(key)
    if version == 0 or value is None:
        return default
    return value


def mget(keys):
    """Fetch several keys in one query; missing keys map to ``None``."""
    keys = list(keys)
    rows = db.session.execute(
        select(KVEntry.key, KVEntry.value).where(KVEntry.key.in_(keys))
    ).all()
    found = {row.key: row.value for row in rows}
    return {key: found.get(key) for key in keys}


def get_by_prefix(prefix):
    rows = db.session.execute(
        select(KVEntry.key, KVEntry.value)
        .where(KVEntry.key.startswith(prefix, autoescape=True))
        .order_by(KVEntry.key)
    ).all()
    return {row.key: row.value for row in rows}


def set(key, value):
    """Replace the whole value under ``key`` regardless of its current version."""
    if not _overwrite(key, value):
        try:
            db.session.execute(
                sql_insert(KVEntry).values(
                    key=key, value=value, version=1, updated_at=datetime.utcnow()
                )
            )
        except IntegrityError:
            # Someone created the key since our update found nothing
            db.session.rollback()
            _overwrite(key, value)
    db.session.commit()


def delete(key):
    db.session.execute(sql_delete(KVEntry).where(KVEntry.key == key))
    db.session.commit()


def update(key, mutator, default=None):
    """
    Read ``key``, let ``mutator`` change the value in place, write it back.

    ``default`` is a factory (``list``, ``dict``) used when the key is absent.
    Returns whatever ``mutator`` returns.
    """
    return update_many(
        [key],
        lambda values: mutator(values[key]),
        defaults={key: default},
    )


def update_many(keys, mutator, defaults=None):
    """
    Read-modify-write several keys inside one transaction.

    ``mutator`` receives a dict of key -> value and mutates the values in
    place. Every write is checked against the version that was read; if any
    key moved underneath us the whole attempt is rolled back and re-run.
    Exceptions raised by ``mutator`` propagate before anything is written.
    """
    defaults = defaults or {}
    max_attempts = max(1, current_app.config.get("KV_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS))
    last_error = None

    for attempt in range(1, max_attempts + 1):
        values = {}
        versions = {}
        for key in keys:
            value, version = get_versioned(key)
            if value is None:
                factory = defaults.get(key)
                value = factory() if factory is not None else None
            values[key] = value
            versions[key] = version

        result = mutator(values)

        try:
            for key in keys:
                _write(key, values[key], versions[key])
            db.session.commit()
            return result
        except ConcurrentUpdateError as e:
            db.session.rollback()
            current_app.logger.warning(
                "⚠️ Lost update race on '%s' (attempt %d/%d)",
                e.key, attempt, max_attempts
            )
            last_error = e

    raise last_error


def _overwrite(key, value):
    """Unchecked update of an existing row; ``False`` when the key is absent."""
    result = db.session.execute(
        sql_update(KVEntry)
        .where(KVEntry.key == key)
        .values(value=value, version=KVEntry.version + 1, updated_at=datetime.utcnow())
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


def _write(key, value, expected_version):
    now = datetime.utcnow()

    if expected_version == 0:
        try:
            db.session.execute(
                sql_insert(KVEntry).values(key=key, value=value, version=1, updated_at=now)
            )
        except IntegrityError as e:
            db.session.rollback()
            raise ConcurrentUpdateError(key) from e
        return 1

    result = db.session.execute(
        sql_update(KVEntry)
        .where(KVEntry.key == key, KVEntry.version == expected_version)
        .values(value=value, version=expected_version + 1, updated_at=now)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        raise ConcurrentUpdateError(key)
    return expected_version + 1
