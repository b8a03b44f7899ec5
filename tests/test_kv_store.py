import pytest

from sexed.extensions import db
from sexed.models.kv_entry import KVEntry
from sexed.utils import kv_store
from sexed.utils.errors import ConcurrentUpdateError, NotFoundError


def test_get_missing_key_returns_default(app):
    assert kv_store.get("nothing") is None
    assert kv_store.get("nothing", []) == []


def test_set_replaces_whole_value(app):
    kv_store.set("resources", [{"id": "a"}])
    kv_store.set("resources", [{"id": "b"}, {"id": "c"}])

    assert kv_store.get("resources") == [{"id": "b"}, {"id": "c"}]
    value, version = kv_store.get_versioned("resources")
    assert version == 2


def test_delete_and_mget(app):
    kv_store.set("a", 1)
    kv_store.set("b", {"x": 2})
    kv_store.delete("a")

    assert kv_store.mget(["a", "b", "c"]) == {"a": None, "b": {"x": 2}, "c": None}


def test_get_by_prefix_only_matches_prefix(app):
    kv_store.set("post_likes", {})
    kv_store.set("post_replies", {})
    kv_store.set("posts", [])
    kv_store.set("post%weird", 1)

    assert sorted(kv_store.get_by_prefix("post_")) == ["post_likes", "post_replies"]


def test_update_uses_default_factory_and_returns_mutator_result(app):
    result = kv_store.update("items", lambda items: items.append("x") or len(items), default=list)

    assert result == 1
    assert kv_store.get("items") == ["x"]


def test_update_many_writes_all_keys_in_one_go(app):
    def apply(values):
        values["left"].append(1)
        values["right"]["n"] = 1

    kv_store.update_many(["left", "right"], apply, defaults={"left": list, "right": dict})

    assert kv_store.mget(["left", "right"]) == {"left": [1], "right": {"n": 1}}


def test_mutator_error_leaves_store_untouched(app):
    kv_store.set("items", ["keep"])

    def apply(items):
        items.clear()
        raise NotFoundError("missing")

    with pytest.raises(NotFoundError):
        kv_store.update("items", apply, default=list)

    assert kv_store.get("items") == ["keep"]


def test_stale_version_write_is_retried_from_fresh_read(app):
    kv_store.set("counter", [])
    calls = []

    def apply(items):
        calls.append(list(items))
        if len(calls) == 1:
            # Another request sneaks in between our read and our write
            kv_store.set("counter", ["other"])
        items.append("mine")

    kv_store.update("counter", apply, default=list)

    assert calls == [[], ["other"]]
    assert kv_store.get("counter") == ["other", "mine"]


def test_gives_up_after_max_attempts(app):
    app.config["KV_MAX_ATTEMPTS"] = 2
    kv_store.set("hot", 0)

    def apply(values):
        kv_store.set("hot", 99)

    with pytest.raises(ConcurrentUpdateError):
        kv_store.update_many(["hot"], apply)

    assert kv_store.get("hot") == 99


def test_version_increments_on_each_write(app):
    kv_store.update("things", lambda t: t.append(1), default=list)
    kv_store.update("things", lambda t: t.append(2), default=list)

    entry = db.session.get(KVEntry, "things")
    assert entry.version == 2
    assert kv_store.get("things") == [1, 2]


def test_set_overwrites_without_checking_version(app, monkeypatch):
    kv_store.set("notes", ["first"])
    # A stale read would make a version-checked write fail
    monkeypatch.setattr(kv_store, "get_versioned", lambda key: (None, 0))

    kv_store.set("notes", ["second"])

    monkeypatch.undo()
    assert kv_store.get_versioned("notes") == (["second"], 2)
