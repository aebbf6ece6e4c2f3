import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import asyncio
from datetime import date, datetime

import streamlit as st
import pandas as pd
import numpy as np
import plotly.graph_objects as go
import plotly.express as px

from core.aggregation import active_days
from core.categories import BASELINE_CATEGORIES, expense_categories, normalize_categories
from core.chat import GREETING, GeminiClient, ask_catty, build_prompt
from core.colors import to_hex
from core.config import configure_logging, get_settings
from core.dates import format_short, resolve_date
from core.domain import EXPENSE, GOAL_PERIODS, INCOME, MOODS, DayStatus, GoalConfig, make_transaction
from core.lazy import recent_transactions, top_categories
from core.period import next_month, previous_month
from core.services import FinanceService
from core.storage import CategoryStore, SettingsStore, TransactionStore
from core.transforms import load_seed

settings = get_settings()
configure_logging(settings.log_level)

st.set_page_config(page_title="Catty Finance", page_icon="😺", layout="centered")

STATUS_COLORS = {
    DayStatus.EXCEEDED: "#F35DC8",
    DayStatus.GOOD: "#A4F982",
    DayStatus.FUTURE: "#F7F3F1",
    DayStatus.INACTIVE: "#E5E7EB",
}
WEEK_DAYS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


@st.cache_resource
def get_service() -> FinanceService:
    data_dir = settings.data_dir
    tx_store = TransactionStore(os.path.join(data_dir, "transactions.json"))
    cat_store = CategoryStore(os.path.join(data_dir, "categories.json"))
    seed_path = os.path.join(data_dir, "seed.json")
    if not tx_store.exists() and os.path.exists(seed_path):
        seed_tx, seed_cats = load_seed(seed_path)
        tx_store.replace_all(seed_tx)
        cat_store.save(normalize_categories(cat_store.list() + seed_cats))
    return FinanceService(
        transactions=tx_store,
        settings=SettingsStore(os.path.join(data_dir, "settings.json")),
        categories=cat_store,
    )


service = get_service()
today = date.today()
goal = service.load_goal(today)

if "view_year" not in st.session_state:
    st.session_state.view_year, st.session_state.view_month = today.year, today.month
if "chat_messages" not in st.session_state:
    st.session_state.chat_messages = [
        {"role": "catty", "text": GREETING, "time": datetime.now().strftime("%I:%M %p")}
    ]


def tx_to_df(tx_list):
    rows = []
    for t in tx_list:
        d = resolve_date(t, today)
        rows.append({
            "id": t.id,
            "date": pd.Timestamp(d) if d else pd.NaT,
            "entered as": t.occurred_on,
            "kind": t.kind,
            "category": t.category,
            "mood": t.mood or "-",
            "amount": t.amount,
            "note": t.note,
        })
    return pd.DataFrame(rows, columns=["id", "date", "entered as", "kind", "category", "mood", "amount", "note"])


def show_errors(result):
    if result.is_left():
        st.error(result.get_error()["message"])
        return True
    return False


menu = st.sidebar.radio("Menu", ["💸 Spending", "😺 Chat", "📊 Analytics", "👤 Profile"])

if menu == "💸 Spending":
    st.title("Spending")
    trans = service.transactions.list()
    summary = service.analytics(today)["summary"]

    k1, k2, k3 = st.columns(3)
    with k1:
        st.metric("Balance", f"${summary['balance']:,.2f}")
    with k2:
        st.metric("Earnings", f"${summary['total_income']:,.2f}")
    with k3:
        st.metric("Spent", f"${summary['total_expense']:,.2f}")

    kind = st.radio("Type", ["Expense", "Income"], horizontal=True)
    with st.form("input_form", clear_on_submit=True):
        col1, col2 = st.columns(2)
        with col1:
            amount = st.number_input("Amount ($)", min_value=0.0, step=1.0, format="%.2f")
            occurred_on = st.text_input("Date", value=format_short(today),
                                        help='e.g. "Nov 4", "11/4", "11/4/24" or "2024-11-04"')
        with col2:
            if kind == "Expense":
                category = st.selectbox("Category", expense_categories(service.categories.list()))
                mood = st.selectbox("Mood", ["-"] + list(MOODS))
            else:
                category, mood = INCOME, "-"
        note = st.text_input("Note (optional)")
        submitted = st.form_submit_button("Add")

        if submitted:
            t = make_transaction(
                kind=EXPENSE if kind == "Expense" else INCOME,
                amount=amount,
                category=category,
                occurred_on=occurred_on,
                mood=None if mood == "-" else mood,
                note=note,
            )
            result = service.add_transaction(t, today)
            if not show_errors(result):
                for alert in result.get_or_else({}).get("alerts", []):
                    st.warning(f"⚠️ {alert}")
                st.success("✅ Transaction added!")

    st.subheader("Daily")
    trans = service.transactions.list()
    if not trans:
        st.info("No transactions yet.")
    for t in recent_transactions(trans, today, len(trans)):
        c1, c2, c3 = st.columns([4, 2, 1])
        with c1:
            st.caption(format_short(resolve_date(t, today)) if resolve_date(t, today) else t.occurred_on or "-")
            st.markdown(f"**{t.category}**" + (f" · {t.note}" if t.note else ""))
        with c2:
            color = "red" if t.is_expense else "green"
            st.markdown(f":{color}[**{t.magnitude:,.2f}$**]")
        with c3:
            if st.button("🗑", key=f"del_{t.id}"):
                service.delete_transaction(t.id)
                st.rerun()

    if trans:
        df = tx_to_df(trans)
        st.download_button("⬇ Download CSV", df.to_csv(index=False), file_name="transactions.csv")

elif menu == "😺 Chat":
    st.title("😺 Catty")
    st.caption("Your Finance Friend")

    for message in st.session_state.chat_messages:
        with st.chat_message("assistant" if message["role"] == "catty" else "user",
                             avatar="😺" if message["role"] == "catty" else None):
            st.write(message["text"])
            st.caption(message["time"])

    user_text = st.chat_input("Type a message...")
    if user_text and user_text.strip():
        now = datetime.now().strftime("%I:%M %p")
        st.session_state.chat_messages.append({"role": "user", "text": user_text, "time": now})
        client = None
        if settings.gemini_api_key:
            client = GeminiClient(
                api_key=settings.gemini_api_key,
                model=settings.gemini_model,
                base_url=settings.gemini_api_url,
                timeout=settings.chat_timeout,
            )
        prompt = build_prompt(service.chat_context(today, settings.chat_recent_limit), user_text)
        with st.spinner("Typing..."):
            reply = asyncio.run(ask_catty(client, prompt, settings.chat_timeout))
        st.session_state.chat_messages.append(
            {"role": "catty", "text": reply, "time": datetime.now().strftime("%I:%M %p")}
        )
        st.rerun()

elif menu == "📊 Analytics":
    st.title("Details")
    view = service.analytics(today, st.session_state.view_year, st.session_state.view_month)
    summary = view["summary"]

    fig_gauge = go.Figure(go.Indicator(
        mode="gauge+number",
        value=summary["percentage"],
        number={"suffix": "%"},
        title={"text": f"${summary['total_expense']:,.2f} spent · Target ${summary['target']:,.0f}"},
        gauge={
            "axis": {"range": [0, 100]},
            "bar": {"color": to_hex(view["rgb"])},
            "bgcolor": "#e5e7eb",
        },
    ))
    fig_gauge.update_layout(height=280, margin=dict(t=60, b=10, l=30, r=30))
    st.plotly_chart(fig_gauge, use_container_width=True)

    c1, c2, c3 = st.columns(3)
    with c1:
        st.metric("Start", view["window"].start.strftime("%d %b"))
    with c2:
        st.metric("Daily goal", f"${summary['daily_goal']:,}")
    with c3:
        st.metric("End", view["window"].end.strftime("%d %b"))
    st.caption(f"{summary['status'].title()} · ${summary['remaining']:,.2f} left · "
               f"{view['days_remaining']} day(s) to go")

    st.subheader("Activity")
    nav_prev, nav_label, nav_next = st.columns([1, 3, 1])
    with nav_prev:
        if st.button("◀", key="prev_month"):
            st.session_state.view_year, st.session_state.view_month = previous_month(
                st.session_state.view_year, st.session_state.view_month)
            st.rerun()
    with nav_label:
        mv = view["month"]
        st.markdown(f"<h4 style='text-align:center'>{date(mv.year, mv.month, 1):%B %Y}</h4>",
                    unsafe_allow_html=True)
    with nav_next:
        if st.button("▶", key="next_month"):
            st.session_state.view_year, st.session_state.view_month = next_month(
                st.session_state.view_year, st.session_state.view_month)
            st.rerun()

    cells = [""] * mv.first_weekday + [
        f"<div style='background:{STATUS_COLORS[view['activity'][d]]};border-radius:50%;"
        f"width:36px;height:36px;line-height:36px;text-align:center;margin:auto'>{d}</div>"
        for d in mv.days
    ]
    cells += [""] * (-len(cells) % 7)
    header = "".join(f"<th style='color:gray;font-weight:500'>{w}</th>" for w in WEEK_DAYS)
    body = "".join(
        "<tr>" + "".join(f"<td>{c}</td>" for c in cells[i:i + 7]) + "</tr>"
        for i in range(0, len(cells), 7)
    )
    st.markdown(f"<table style='width:100%'><tr>{header}</tr>{body}</table>", unsafe_allow_html=True)
    counts = view["activity_counts"]
    st.caption(f"🟣 Over budget: {counts[DayStatus.EXCEEDED]} · 🟢 On budget: {counts[DayStatus.GOOD]}")

    st.subheader("Breakdown")
    months = view["available_months"] or [(today.year, today.month)]
    selected = st.selectbox("Month", months, format_func=lambda ym: f"{date(ym[0], ym[1], 1):%B %Y}")
    month_cats = service.analytics(today, selected[0], selected[1])["month_categories"]
    st.metric("Monthly total", f"${view['monthly_totals'].get(tuple(selected), 0):,.2f}")
    if month_cats:
        df_cat = pd.DataFrame({"Category": list(month_cats), "Total": list(month_cats.values())})
        fig_cat = px.bar(df_cat.sort_values("Total", ascending=False), x="Category", y="Total",
                         title="Spending by category")
        st.plotly_chart(fig_cat, use_container_width=True)
    else:
        st.info("No dated spending in this month.")

    moods = summary["mood_totals"]
    if moods:
        df_mood = pd.DataFrame(
            [{"Mood": m, "Total": v["total"], "Count": v["count"], "Share %": v["share"]}
             for m, v in moods.items()]
        )
        fig_mood = px.pie(df_mood, values="Total", names="Mood", title="Spending by mood")
        fig_mood.update_layout(height=300)
        st.plotly_chart(fig_mood, use_container_width=True)

elif menu == "👤 Profile":
    st.title("Profile")
    trans = service.transactions.list()
    k1, k2 = st.columns(2)
    with k1:
        st.metric("Days Active", active_days(trans, today))
    with k2:
        st.metric("Transactions", len(trans))

    top = list(top_categories(trans, 3))
    if top:
        st.caption("Top categories: " + ", ".join(f"{name} (${total:,.2f})" for name, total in top))

    st.header("🎯 Goal")
    with st.form("goal_form"):
        target = st.number_input("Target ($)", min_value=0.0, value=float(goal.target), step=100.0)
        period = st.selectbox("Period (days)", GOAL_PERIODS, index=GOAL_PERIODS.index(goal.period_days)
                              if goal.period_days in GOAL_PERIODS else len(GOAL_PERIODS) - 1)
        start = st.date_input("Start date", value=goal.start_date)
        if st.form_submit_button("Save goal"):
            result = service.update_goal(GoalConfig(target=target, period_days=period, start_date=start))
            if not show_errors(result):
                st.success("Goal updated")

    st.header("🗂 Categories")
    cats = service.categories.list()
    st.write(", ".join(f"**{c}**" if c in BASELINE_CATEGORIES else c for c in cats))

    col_add, col_remove = st.columns(2)
    with col_add:
        new_name = st.text_input("New category")
        if st.button("Add category") and not show_errors(service.add_category(new_name)):
            st.rerun()
    with col_remove:
        custom = [c for c in cats if c not in BASELINE_CATEGORIES]
        to_remove = st.selectbox("Remove category", custom or ["-"])
        if st.button("Remove", disabled=not custom) and not show_errors(service.remove_category(to_remove)):
            st.rerun()

    with st.expander("Rename category"):
        old = st.selectbox("Category", custom or ["-"], key="rename_old")
        new = st.text_input("New name", key="rename_new")
        if st.button("Rename", disabled=not custom) and not show_errors(service.rename_category(old, new)):
            st.rerun()

    if not trans:
        st.info("No data yet.")
    else:
        amounts = np.array([t.magnitude for t in trans if t.is_expense])
        if amounts.size:
            st.caption(f"Average expense: ${amounts.mean():,.2f} · Largest: ${amounts.max():,.2f}")
