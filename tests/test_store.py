import datetime as dt

import pytest

from cashpulse.data.schemas import AiInsight, InsightType, Report, ReportType
from cashpulse.data.store import JsonFileStore, MemoryStore, build_store

from conftest import tx


def insight(title, user_id="demo"):
    return AiInsight(title=title, content=f"{title} body", type=InsightType.INFO, user_id=user_id)


def test_unknown_user_has_nothing(any_store):
    assert any_store.list_by_user("nobody") == []
    assert any_store.list_insights("nobody") == []
    assert any_store.list_reports("nobody") == []


def test_bulk_insert_scopes_by_user(any_store):
    count = any_store.bulk_insert([
        tx("2024-01-01", 10, user_id="alice"),
        tx("2024-01-02", 20, "income", user_id="bob"),
        tx("2024-01-03", 30, user_id="alice"),
    ])
    assert count == 3
    assert [t.amount for t in any_store.list_by_user("alice")] == [10, 30]
    assert [t.amount for t in any_store.list_by_user("bob")] == [20]
    assert any_store.row_count() == 3


def test_transactions_round_trip_fields(any_store):
    saved = tx("2024-02-29", 12.75, "income", "Revenue", "Invoice 7", user_id="carol")
    any_store.bulk_insert([saved])
    (stored,) = any_store.list_by_user("carol")
    assert stored == saved


def test_negative_amounts_are_rejected():
    with pytest.raises(ValueError):
        tx("2024-01-01", -1)


def test_replace_insights_swaps_whole_set(any_store):
    any_store.replace_insights("demo", [insight("Old A"), insight("Old B")])
    any_store.replace_insights("demo", [insight("New")])
    assert [i.title for i in any_store.list_insights("demo")] == ["New"]

    any_store.clear_insights("demo")
    assert any_store.list_insights("demo") == []


def test_insights_are_per_user(any_store):
    any_store.replace_insights("alice", [insight("A", "alice")])
    any_store.replace_insights("bob", [insight("B", "bob")])
    assert [i.title for i in any_store.list_insights("alice")] == ["A"]


def test_reports_are_append_only(any_store):
    when = dt.datetime(2024, 5, 1, 12, 0, tzinfo=dt.timezone.utc)
    any_store.add_report(Report("First", "# One", ReportType.MONTHLY, "demo", when))
    any_store.add_report(Report("Second", "# Two", ReportType.YEARLY, "demo", when))
    reports = any_store.list_reports("demo")
    assert [r.title for r in reports] == ["First", "Second"]
    assert reports[1].type == ReportType.YEARLY
    assert reports[0].generated_at == when


def test_returned_lists_are_copies(memory_store):
    memory_store.bulk_insert([tx("2024-01-01", 1)])
    memory_store.list_by_user("demo").clear()
    assert len(memory_store.list_by_user("demo")) == 1


def test_json_store_persists_across_instances(tmp_path):
    folder = tmp_path / "store"
    JsonFileStore(folder).bulk_insert([tx("2024-01-01", 5, user_id="dave")])
    reopened = JsonFileStore(folder)
    assert [t.amount for t in reopened.list_by_user("dave")] == [5]
    assert reopened.row_count() == 1


def test_json_store_sanitises_user_ids(tmp_path):
    store = JsonFileStore(tmp_path)
    store.bulk_insert([tx("2024-01-01", 5, user_id="../escape")])
    assert [p.parent for p in tmp_path.glob("*.json")] == [tmp_path]
    assert len(store.list_by_user("../escape")) == 1


def test_insight_locks_are_independent_per_user(memory_store):
    with memory_store.insight_lock("alice"):
        with memory_store.insight_lock("bob"):
            pass


def test_build_store_selects_backend():
    assert isinstance(build_store("memory"), MemoryStore)
    assert isinstance(build_store("json"), JsonFileStore)
    with pytest.raises(ValueError, match="Unknown storage backend"):
        build_store("postgres")
