import json
from datetime import date

from core.aggregation import summarize
from core.categories import BASELINE_CATEGORIES
from core.domain import GoalConfig, Transaction
from core.storage import CategoryStore, SettingsStore, TransactionStore


def test_transaction_store_append_list_delete(tmp_path):
    store = TransactionStore(tmp_path / "tx.json")
    assert store.list() == ()
    assert not store.exists()

    t1 = Transaction("1", "expense", -10.5, "food", "Nov 4", mood="happy", note="lunch")
    t2 = Transaction("2", "income", 40, "income", "Nov 1")
    store.append(t1)
    store.append(t2)
    assert store.list() == (t1, t2)

    assert store.delete("1") is True
    assert store.list() == (t2,)
    assert store.delete("missing") is False


def test_transaction_store_skips_malformed_entries(tmp_path):
    path = tmp_path / "tx.json"
    path.write_text(json.dumps([
        {"id": 1, "kind": "expense", "amount": "-3", "category": "Food", "occurred_on": "Nov 4"},
        {"kind": "expense"},
        {"id": 2, "kind": "expense", "amount": "lots"},
    ]))
    trans = TransactionStore(path).list()
    assert len(trans) == 1
    assert trans[0].id == "1"
    assert trans[0].amount == -3
    assert trans[0].category == "food"


def test_transaction_store_rejects_non_finite_amounts_and_unknown_kinds(tmp_path):
    path = tmp_path / "tx.json"
    path.write_text(
        "["
        '{"id": "1", "kind": "expense", "amount": NaN, "category": "food", "occurred_on": "Nov 4"},'
        '{"id": "2", "kind": "expense", "amount": "inf", "category": "food", "occurred_on": "Nov 4"},'
        '{"id": "3", "kind": "refund", "amount": 5, "category": "food", "occurred_on": "Nov 4"},'
        '{"id": "4", "kind": "expense", "amount": -5, "category": "food", "occurred_on": "Nov 4", "mood": ["sad"]},'
        '{"id": "5", "kind": "expense", "amount": -7, "category": "food", "occurred_on": "Nov 4", "mood": "angry"}'
        "]"
    )
    trans = TransactionStore(path).list()
    assert [t.id for t in trans] == ["4", "5"]
    assert all(t.mood is None for t in trans)

    summary = summarize(trans, GoalConfig(100, 30, date(2024, 11, 1)), date(2024, 11, 17))
    assert summary["total_expense"] == 12
    assert summary["mood_totals"] == {}


def test_transaction_store_corrupt_file_reads_empty(tmp_path):
    path = tmp_path / "tx.json"
    path.write_text("{not json")
    assert TransactionStore(path).list() == ()


def test_settings_save_suppressed_until_loaded(tmp_path):
    path = tmp_path / "settings.json"
    stored = GoalConfig(target=800, period_days=14, start_date=date(2024, 11, 1))
    path.write_text(json.dumps({"target": 800, "period_days": 14, "start_date": "2024-11-01"}))

    store = SettingsStore(path)
    assert store.loading is True
    defaults = GoalConfig(target=5000, period_days=30, start_date=date(2024, 11, 17))
    assert store.save(defaults) is False
    assert store.load() == stored
    assert store.loading is False


def test_settings_round_trip(tmp_path):
    store = SettingsStore(tmp_path / "settings.json")
    assert store.load() is None
    goal = GoalConfig(target=250.0, period_days=7, start_date=date(2024, 11, 10))
    assert store.save(goal) is True
    assert SettingsStore(tmp_path / "settings.json").load() == goal


def test_settings_malformed_reads_absent(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"target": 100}))
    store = SettingsStore(path)
    assert store.load() is None
    assert store.loading is False


def test_category_store_normalizes(tmp_path):
    path = tmp_path / "cats.json"
    path.write_text(json.dumps(["Gifts", 42, "gifts", "FOOD"]))
    store = CategoryStore(path)
    assert store.list() == ("shopping", "transport", "entertainment", "gifts", "food")
    store.save(BASELINE_CATEGORIES + ("subs",))
    assert store.list() == BASELINE_CATEGORIES + ("subs",)
