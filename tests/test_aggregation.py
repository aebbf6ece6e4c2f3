from datetime import date

from core.aggregation import (
    active_days,
    available_months,
    balance,
    category_totals,
    daily_totals,
    monthly_totals,
    mood_totals,
    remaining,
    spending_percentage,
    summarize,
    total_expense,
    total_income,
)
from core.domain import GoalConfig, Transaction

TODAY = date(2024, 11, 17)


def make_tx(id, kind, amount, occurred_on, category=None, mood=None):
    if category is None:
        category = "income" if kind == "income" else "shopping"
    return Transaction(id=id, kind=kind, amount=amount, category=category,
                       occurred_on=occurred_on, mood=mood)


def scenario():
    trans = (
        make_tx("t1", "expense", -40, "Nov 4"),
        make_tx("t2", "income", 40, "Nov 1"),
    )
    goal = GoalConfig(target=100, period_days=30, start_date=date(2024, 11, 1))
    return trans, goal


def test_totals_and_percentage_scenario():
    trans, goal = scenario()
    summary = summarize(trans, goal, TODAY)
    assert summary["total_expense"] == 40
    assert summary["total_income"] == 40
    assert summary["balance"] == 0
    assert summary["percentage"] == 40
    assert summary["daily_goal"] == 3
    assert summary["remaining"] == 60
    assert summary["status"] == "on track"


def test_magnitudes_ignore_stored_sign():
    trans = (
        make_tx("t1", "expense", 30, "Nov 4"),
        make_tx("t2", "expense", -20, "Nov 5"),
        make_tx("t3", "income", -50, "Nov 1"),
    )
    assert total_expense(trans) == 50
    assert total_income(trans) == 50
    assert balance(trans) == 0


def test_percentage_is_not_clamped_and_handles_zero_target():
    assert spending_percentage(150, 100) == 150
    assert spending_percentage(50, 0) == 0
    assert remaining(150, 100) == 0
    assert remaining(40, 100) == 60


def test_unparsable_date_counts_for_category_and_mood_only():
    trans = (make_tx("t1", "expense", -25, "sometime last week", category="food", mood="sad"),)
    assert category_totals(trans, TODAY) == {"food": 25}
    assert mood_totals(trans)["sad"]["total"] == 25
    assert daily_totals(trans, TODAY, 2024, 11) == {}
    assert monthly_totals(trans, TODAY) == {}
    assert category_totals(trans, TODAY, 2024, 11) == {}


def test_category_totals_month_filter():
    trans = (
        make_tx("t1", "expense", -10, "Nov 4", category="food"),
        make_tx("t2", "expense", -5, "Oct 2", category="food"),
        make_tx("t3", "expense", -7, "Nov 9", category="transport"),
        make_tx("t4", "income", 100, "Nov 1"),
    )
    assert category_totals(trans, TODAY) == {"food": 15, "transport": 7}
    assert category_totals(trans, TODAY, 2024, 11) == {"food": 10, "transport": 7}
    assert category_totals(trans, TODAY, 2024, 10) == {"food": 5}


def test_mood_shares_use_tagged_subset_only():
    trans = (
        make_tx("t1", "expense", -30, "Nov 4", mood="happy"),
        make_tx("t2", "expense", -10, "Nov 5", mood="sad"),
        make_tx("t3", "expense", -60, "Nov 6"),
    )
    moods = mood_totals(trans)
    assert set(moods) == {"happy", "sad"}
    assert moods["happy"] == {"total": 30, "count": 1, "share": 75, "count_share": 50}
    assert moods["sad"]["share"] == 25


def test_daily_totals_only_cover_displayed_month():
    trans = (
        make_tx("t1", "expense", -10, "Nov 4"),
        make_tx("t2", "expense", -5, "Nov 4"),
        make_tx("t3", "expense", -7, "10/4"),
    )
    assert daily_totals(trans, TODAY, 2024, 11) == {4: 15}
    assert daily_totals(trans, TODAY, 2024, 10) == {4: 7}


def test_monthly_totals_and_selector_order():
    trans = (
        make_tx("t1", "expense", -10, "Nov 4"),
        make_tx("t2", "expense", -5, "2023-03-01"),
        make_tx("t3", "expense", -7, "10/4"),
        make_tx("t4", "expense", -1, "10/5"),
    )
    assert monthly_totals(trans, TODAY) == {(2024, 11): 10, (2023, 3): 5, (2024, 10): 8}
    assert available_months(trans, TODAY) == [(2024, 11), (2024, 10), (2023, 3)]


def test_active_days_counts_distinct_dates():
    trans = (
        make_tx("t1", "expense", -10, "Nov 4"),
        make_tx("t2", "income", 10, "11/4"),
        make_tx("t3", "expense", -7, "Nov 5"),
        make_tx("t4", "expense", -7, "no idea"),
    )
    assert active_days(trans, TODAY) == 2


def test_summarize_is_idempotent():
    trans, goal = scenario()
    first = summarize(trans, goal, TODAY)
    second = summarize(trans, goal, TODAY)
    assert first == second
    assert summarize(list(trans), goal, TODAY) == first
