import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import streamlit as st
import pandas as pd
import plotly.graph_objects as go
import plotly.express as px
from datetime import datetime

from budget_core.classifier import CATEGORY_OPTIONS, category_label, kind_label
from budget_core.collator import StreamCollator
from budget_core.config import configure_logging, get_seed_path
from budget_core.domain import Kind
from budget_core.events import SNAPSHOT_UPDATED, STREAM_FAILED
from budget_core.formatting import format_rupiah, format_percent
from budget_core.frames import budget_frame, transactions_frame
from budget_core.functional import validate_profile_input, validate_transaction_input
from budget_core.insights import financial_analysis, POSITIVE, NEGATIVE
from budget_core.status import RiskTier, EmergencyTier
from budget_core.store import InMemoryLedger, connect
from budget_core.transforms import load_seed, current_period, start_of_month

configure_logging()
st.set_page_config(page_title="Anti-FOMO Budget", layout="wide")

TIER_COLORS = {
    RiskTier.SAFE: "#10b981",
    RiskTier.WARNING: "#f59e0b",
    RiskTier.CRITICAL: "#ef4444",
    RiskTier.DATA_MISSING: "#3b82f6",
    EmergencyTier.CRITICAL: "#ef4444",
    EmergencyTier.PROGRESS: "#f59e0b",
    EmergencyTier.ACHIEVED: "#10b981",
    EmergencyTier.DATA_MISSING: "#3b82f6",
}
BUCKET_COLORS = ["#3b82f6", "#f59e0b", "#10b981", "#6366f1"]


def on_snapshot(event, payload):
    st.session_state.latest = payload
    return {"received": event.ts}


def on_stream_failed(event, payload):
    st.session_state.failures.append(payload["message"])
    return {"received": event.ts}


if "collator" not in st.session_state:
    profile, seed_tx = load_seed(get_seed_path())
    st.session_state.ledger = InMemoryLedger(profile, seed_tx)
    st.session_state.collator = StreamCollator()
    st.session_state.failures = []
    st.session_state.collator.bus.subscribe(SNAPSHOT_UPDATED, on_snapshot)
    st.session_state.collator.bus.subscribe(STREAM_FAILED, on_stream_failed)
    connect(st.session_state.collator, st.session_state.ledger)

ledger = st.session_state.ledger
collator = st.session_state.collator
latest = st.session_state.latest
snapshot = latest["snapshot"]
status = latest["status"]

for msg in st.session_state.failures:
    st.warning(f"⚠️ {msg}. Showing the last data that loaded.")
st.session_state.failures = []

menu = st.sidebar.radio(
    "Menu",
    ["🏠 Dashboard", "🧾 Budget & Transactions", "🛟 Emergency Fund"]
)

if menu == "🏠 Dashboard":
    st.title("🏠 Dashboard")

    k1, k2, k3, k4 = st.columns(4)
    with k1:
        st.metric("Cash Balance", format_rupiah(snapshot.cash_balance))
    with k2:
        st.metric("Income", format_rupiah(snapshot.income))
    with k3:
        st.metric("Expense", format_rupiah(snapshot.expense))
    with k4:
        st.metric("Savings Allocation", format_rupiah(snapshot.targets.savings_allocation))

    col_ideal, col_real = st.columns(2)
    frame = budget_frame(snapshot)
    with col_ideal:
        st.subheader("Ideal Budget (50/30/10/10)")
        if frame["target"].sum() == 0:
            st.info("Set your monthly income to see the ideal allocation.")
        else:
            fig_ideal = px.pie(
                frame,
                values="target",
                names="bucket",
                hole=0.7,
                color_discrete_sequence=BUCKET_COLORS,
            )
            fig_ideal.update_layout(height=300, showlegend=False)
            st.plotly_chart(fig_ideal, use_container_width=True)
    with col_real:
        st.subheader("Realization")
        fig_real = go.Figure()
        fig_real.add_trace(go.Bar(x=frame["bucket"], y=frame["target"], name="Target", marker_color="#e0f2fe"))
        fig_real.add_trace(go.Bar(x=frame["bucket"], y=frame["realized"], name="Realized", marker_color=BUCKET_COLORS))
        fig_real.update_layout(barmode="group", height=300, margin=dict(t=30, b=10, l=10, r=10))
        st.plotly_chart(fig_real, use_container_width=True)

    st.subheader("🛍️ Anti-FOMO")
    color = TIER_COLORS[status.headline_risk]
    st.markdown(
        f"<div style='border-left: 6px solid {color}; padding: 8px 16px'>"
        f"<h2>{status.risk_display}</h2>"
        f"<b>{status.headline_risk.value.replace('_', ' ').upper()}</b> · "
        f"lifestyle {format_rupiah(snapshot.realized.wants)} of {format_rupiah(snapshot.targets.wants)}"
        f"</div>",
        unsafe_allow_html=True,
    )

    st.subheader("📋 Analysis")
    insights = financial_analysis(snapshot)
    if not insights:
        st.info("Analysis appears once income or expenses are recorded.")
    for insight in insights:
        if insight.tone == POSITIVE:
            st.success(insight.message)
        elif insight.tone == NEGATIVE:
            st.error(insight.message)
        else:
            st.write(insight.message)

    st.subheader("🔔 Quick Alerts")
    if status.emergency == EmergencyTier.DATA_MISSING:
        st.info("Emergency fund: set your monthly income to compute a target.")
    elif status.emergency == EmergencyTier.CRITICAL:
        st.error(f"Emergency fund (critical): only {status.emergency_display} of {format_rupiah(snapshot.targets.emergency_lifetime)}.")
    elif status.emergency == EmergencyTier.PROGRESS:
        st.warning(f"Emergency fund (in progress): {status.emergency_display} of {format_rupiah(snapshot.targets.emergency_lifetime)}.")
    else:
        st.success(f"Emergency fund (achieved): {status.emergency_display}.")

    if status.banner_risk == RiskTier.DATA_MISSING:
        st.info("Lifestyle: set your monthly income.")
    elif status.banner_risk == RiskTier.CRITICAL:
        st.error(f"Lifestyle: {snapshot.lifestyle_risk_score}% of budget. Over the limit!")
    elif status.banner_risk == RiskTier.WARNING:
        st.warning(f"Lifestyle: {snapshot.lifestyle_risk_score}% of budget. Getting close.")
    else:
        st.success(f"Lifestyle: {snapshot.lifestyle_risk_score}% of budget.")

elif menu == "🧾 Budget & Transactions":
    st.title("🧾 Budget & Transactions")

    col_profile, col_tx = st.columns(2)
    with col_profile:
        st.subheader("👤 Profile")
        with st.form("profile_form"):
            income_in = st.number_input("Monthly income (Rp)", min_value=0.0, value=float(snapshot.monthly_income), step=100000.0)
            months_in = st.number_input("Emergency fund target (months)", min_value=0, value=int(snapshot.emergency_fund_target_months), step=1)
            if st.form_submit_button("Save profile"):
                result = validate_profile_input(income_in, months_in)
                if result.is_left():
                    st.error(f"❌ {result.get_error()['message']}")
                else:
                    ledger.save_profile(result.get_or_else(None))
                    st.success("✅ Profile updated")
                    st.rerun()

        budget = budget_frame(snapshot)
        for _, row in budget.iterrows():
            st.metric(row["bucket"], format_rupiah(row["target"]))

    with col_tx:
        st.subheader("➕ New Transaction")
        kind_in = st.selectbox("Type", options=list(Kind), format_func=kind_label)
        category_in = st.selectbox("Category", options=CATEGORY_OPTIONS[kind_in], format_func=category_label)
        amount_in = st.number_input("Amount (Rp)", min_value=0.0, step=10000.0)
        description_in = st.text_input("Description")
        if st.button("Add transaction"):
            result = validate_transaction_input(kind_in, category_in, amount_in, description_in)
            if result.is_left():
                st.error(f"❌ {result.get_error()['message']}")
            else:
                ledger.add_transaction(**result.get_or_else({}))
                st.rerun()

    st.subheader("This month")
    month_tx = current_period(ledger.transactions, start_of_month(datetime.now()))
    df = transactions_frame(month_tx)
    if df.empty:
        st.info("No transactions this month.")
    else:
        disp = df.copy()
        disp["date"] = pd.to_datetime(disp["date"]).dt.strftime("%d %b %Y")
        disp["signed_amount"] = disp["signed_amount"].map(format_rupiah)
        st.table(disp.drop(columns=["id"]).reset_index(drop=True))
        to_delete = st.selectbox("Delete transaction", options=[""] + list(df["id"]))
        if to_delete and st.button("🗑️ Delete"):
            ledger.delete_transaction(to_delete)
            st.rerun()

elif menu == "🛟 Emergency Fund":
    st.title("🛟 Emergency Fund")
    c1, c2, c3 = st.columns(3)
    with c1:
        st.metric("Collected (all time)", format_rupiah(snapshot.emergency_lifetime_total))
    with c2:
        st.metric("Target", format_rupiah(snapshot.targets.emergency_lifetime))
    with c3:
        st.metric("Target months", snapshot.emergency_fund_target_months)

    st.markdown(f"## {format_percent(snapshot.emergency_completion_ratio)}")
    st.progress(min(1.0, snapshot.emergency_completion_ratio or 0.0))

    if status.emergency == EmergencyTier.DATA_MISSING:
        st.info("Set your monthly income on the Budget & Transactions page to start.")
    elif status.emergency == EmergencyTier.ACHIEVED:
        st.success("Your emergency fund target is reached.")
    else:
        st.warning("Target not reached yet. Keep saving!")
