from core.categories import (
    BASELINE_CATEGORIES,
    add_category,
    expense_categories,
    normalize_categories,
    remove_category,
    rename_category,
)
from core.domain import Transaction

CATS = BASELINE_CATEGORIES + ("subscriptions",)


def make_sample():
    return (
        Transaction("t1", "expense", -9.99, "subscriptions", "Nov 1"),
        Transaction("t2", "expense", -20, "food", "Nov 2"),
        Transaction("t3", "expense", -4.99, "subscriptions", "Nov 3", mood="sad"),
        Transaction("t4", "income", 100, "income", "Nov 1"),
    )


def test_rename_baseline_fails():
    result = rename_category(CATS, make_sample(), "shopping", "shops")
    assert result.is_left()
    assert result.get_error()["error"] == "baseline_category"


def test_rename_custom_relabels_transactions_together():
    result = rename_category(CATS, make_sample(), "subscriptions", "subs")
    assert result.is_right()
    cats, trans = result.get_or_else(None)
    assert "subscriptions" not in cats
    assert cats[-1] == "subs"
    assert [t.category for t in trans] == ["subs", "food", "subs", "income"]
    assert trans[2].mood == "sad"
    assert trans[0].amount == -9.99


def test_rename_rejects_collision_and_unknown():
    assert rename_category(CATS, (), "subscriptions", "Food").get_error()["error"] == "duplicate_category"
    assert rename_category(CATS, (), "gifts", "presents").get_error()["error"] == "category_not_found"
    assert rename_category(CATS, (), "subscriptions", "  ").get_error()["error"] == "empty_name"


def test_add_category():
    result = add_category(CATS, "  Gifts ")
    assert result.get_or_else(None) == CATS + ("gifts",)
    assert add_category(CATS, "FOOD").get_error()["error"] == "duplicate_category"
    assert add_category(CATS, "").get_error()["error"] == "empty_name"


def test_remove_category():
    assert remove_category(CATS, "subscriptions").get_or_else(None) == BASELINE_CATEGORIES
    assert remove_category(CATS, "food").get_error()["error"] == "baseline_category"
    assert remove_category(CATS, "gifts").get_error()["error"] == "category_not_found"


def test_last_category_cannot_be_removed():
    cats = ("subs", "misc")
    cats = remove_category(cats, "misc").get_or_else(None)
    assert cats == ("subs",)
    result = remove_category(cats, "subs")
    assert result.is_left()
    assert result.get_error()["error"] == "last_category"
    assert cats == ("subs",)


def test_normalize_categories_at_load():
    raw = ["Food", "food", 3, None, "  Subs ", ""]
    assert normalize_categories(raw) == ("shopping", "transport", "entertainment", "food", "subs")
    assert normalize_categories("garbage") == BASELINE_CATEGORIES
    assert normalize_categories(None) == BASELINE_CATEGORIES


def test_expense_categories_include_other():
    assert expense_categories(CATS)[-1] == "other"
    assert expense_categories(CATS + ("other",)).count("other") == 1


def test_reserved_names_cannot_be_added_or_renamed_to():
    assert add_category(CATS, "Income").get_error()["error"] == "reserved_category"
    assert add_category(CATS, " other ").get_error()["error"] == "reserved_category"

    result = rename_category(CATS, make_sample(), "subscriptions", "income")
    assert result.get_error()["error"] == "reserved_category"
    assert rename_category(CATS, (), "subscriptions", "OTHER").get_error()["error"] == "reserved_category"


def test_normalize_drops_reserved_names():
    assert normalize_categories(["subs", "income", "Other"]) == BASELINE_CATEGORIES + ("subs",)
