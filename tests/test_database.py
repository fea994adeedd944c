import sqlite3

from core.database import DB_FILE_NAME, Database, open_database


def test_schema_created(db):
    conn = sqlite3.connect(db.db_path)
    cursor = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name='config'"
    )
    assert cursor.fetchone() is not None
    conn.close()


def test_set_and_get_preserves_types(db):
    db.set("name", "value")
    db.set("flag", False)

    assert db.get("name") == "value"
    assert db.get("flag") is False


def test_get_missing_returns_default(db):
    assert db.get("missing") is None
    assert db.get("missing", "fallback") == "fallback"


def test_has_and_delete(db):
    db.set("key", "value")
    assert db.has("key")

    db.delete("key")
    assert not db.has("key")


def test_set_overwrites(db):
    db.set("key", "one")
    db.set("key", "two")

    assert db.get("key") == "two"
    assert db.items() == {"key": "two"}


def test_items_sorted(db):
    db.set("b", True)
    db.set("a", "x")

    assert list(db.items()) == ["a", "b"]


def test_persists_across_reopen(data_dir):
    with open_database(data_dir) as db:
        assert db.db_path == data_dir / DB_FILE_NAME
        db.set("updateNotify", True)

    with Database(data_dir / DB_FILE_NAME) as db:
        assert db.get("updateNotify") is True


def test_creates_parent_directory(tmp_path):
    path = tmp_path / "new" / "dir" / DB_FILE_NAME

    with Database(path) as db:
        db.set("k", "v")

    assert path.exists()
