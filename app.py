"""
Guard Operations — Interactive Dashboard

Run with:  streamlit run app.py
"""

import sys
from datetime import date
from pathlib import Path

import streamlit as st
import plotly.graph_objects as go

sys.path.insert(0, str(Path(__file__).resolve().parent))

from guard_ops_dashboard.config import (
    ACTIVITY_REPORT_FILE,
    ATTENDANCE_REPORT_FILE,
    DEFAULT_SELECTED_DATE,
    INCLUDE_ACTIVITY_ONLY_GUARDS,
    RAG_COLORS,
)
from guard_ops_dashboard.loaders import (
    ReportLoadError,
    load_activity_report,
    load_attendance_report,
)
from guard_ops_dashboard.dashboard import (
    compliance_frames,
    filter_guards,
    get_available_dates,
    get_overview_summary,
    guards_frame,
    hourly_frame,
    locations_frame,
)
from guard_ops_dashboard.kpis import classify_coverage, classify_performance
from guard_ops_dashboard.session import DashboardSession
from guard_ops_dashboard.simulator import generate_reports

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="Guard Operations Dashboard",
    page_icon="🛡️",
    layout="wide",
    initial_sidebar_state="expanded",
)

COVERAGE_COLORS = {
    "Optimal": RAG_COLORS["green"],
    "Adequate": RAG_COLORS["amber"],
    "Needs Attention": RAG_COLORS["red"],
}


# ---------------------------------------------------------------------------
# Data loading (cached)
# ---------------------------------------------------------------------------
@st.cache_data
def load_all_data():
    if ACTIVITY_REPORT_FILE.exists() and ATTENDANCE_REPORT_FILE.exists():
        activity_df = load_activity_report(ACTIVITY_REPORT_FILE)
        attendance_df = load_attendance_report(ATTENDANCE_REPORT_FILE)
        simulated = False
    else:
        activity_df, attendance_df = generate_reports()
        simulated = True

    return {
        "activity_df": activity_df,
        "attendance_df": attendance_df,
        "simulated": simulated,
    }


try:
    data = load_all_data()
except ReportLoadError as exc:
    st.error(f"Error loading dashboard: {exc}")
    st.stop()

# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------
st.sidebar.title("Guard Operations")
st.sidebar.markdown("Security Patrol Analytics")
st.sidebar.divider()

available_dates = get_available_dates(data["activity_df"], data["attendance_df"])
default_date = DEFAULT_SELECTED_DATE
if available_dates and default_date not in available_dates:
    default_date = available_dates[-1]

picked = st.sidebar.date_input("Select Date", value=date.fromisoformat(default_date))
selected_date = picked.isoformat()

include_activity_only = st.sidebar.checkbox(
    "Include guards without attendance records",
    value=INCLUDE_ACTIVITY_ONLY_GUARDS,
)

page = st.sidebar.radio(
    "Navigate",
    ["Overview", "Personnel Analytics", "Coverage Analysis", "Compliance"],
)

st.sidebar.divider()
if data["simulated"]:
    st.sidebar.caption("Data: simulated exports (CSV files not found)")
else:
    st.sidebar.caption(f"Data: {ACTIVITY_REPORT_FILE.name}, {ATTENDANCE_REPORT_FILE.name}")

# ---------------------------------------------------------------------------
# Reload (one session per viewer)
# ---------------------------------------------------------------------------
if "dashboard_session" not in st.session_state:
    st.session_state["dashboard_session"] = DashboardSession(
        ACTIVITY_REPORT_FILE,
        ATTENDANCE_REPORT_FILE,
        activity_loader=lambda _: data["activity_df"],
        attendance_loader=lambda _: data["attendance_df"],
    )

session = st.session_state["dashboard_session"]
session.include_activity_only_guards = include_activity_only
state = session.reload(selected_date)
if state.status == "error":
    st.error(f"Error loading dashboard: {state.error}")
    st.stop()

result = state.result
overview = get_overview_summary(result)


# ---------------------------------------------------------------------------
# Helper: KPI card
# ---------------------------------------------------------------------------
def kpi_card(label: str, value: str, sub_value: str = "", color: str = "#3B82F6"):
    st.markdown(
        f"""
        <div style="background: linear-gradient(135deg, {color}22, {color}11);
                    border-left: 4px solid {color};
                    border-radius: 8px; padding: 16px; margin-bottom: 8px;">
            <div style="font-size: 13px; color: #888; font-weight: 600; text-transform: uppercase;">{label}</div>
            <div style="font-size: 28px; font-weight: 700; color: #222; margin: 4px 0;">{value}</div>
            <div style="font-size: 13px; color: #666;">{sub_value}</div>
        </div>
        """,
        unsafe_allow_html=True,
    )


def score_color(score: float) -> str:
    return RAG_COLORS[classify_performance(score)]


# ===========================================================================
# PAGE: Overview
# ===========================================================================
if page == "Overview":
    st.title("Operations Overview")
    st.caption(f"Date: **{selected_date}**")

    cols = st.columns(4)
    with cols[0]:
        kpi_card(
            "Overall Compliance",
            f"{overview['overall_compliance']}%",
            f"{result.compliance.passed_checks}/{result.compliance.total_checks} checks passed",
            score_color(overview["overall_compliance"]),
        )
    with cols[1]:
        kpi_card(
            "Shift Punctuality",
            f"{overview['punctuality_rate']}%",
            f"{overview['late_arrivals']} late arrivals",
            score_color(overview["punctuality_rate"]),
        )
    with cols[2]:
        kpi_card(
            "Active Guards",
            f"{overview['active_guards']}",
            f"{overview['high_performers']} high performers",
        )
    with cols[3]:
        kpi_card(
            "Monitored Locations",
            f"{overview['monitored_locations']}",
            f"{overview['fully_covered_locations']} fully covered",
        )

    st.divider()

    hourly = hourly_frame(result)
    col1, col2 = st.columns(2)

    with col1:
        st.subheader("Hourly Activity")
        if hourly.empty:
            st.info("No activity logged for this date.")
        else:
            fig = go.Figure()
            fig.add_trace(go.Bar(x=hourly["hour"], y=hourly["total"], name="Total", marker_color="#3B82F6"))
            fig.add_trace(go.Bar(x=hourly["hour"], y=hourly["on_time"], name="On Time", marker_color="#10B981"))
            fig.add_trace(go.Bar(x=hourly["hour"], y=hourly["delayed"], name="Delayed", marker_color="#F59E0B"))
            fig.update_layout(
                barmode="group",
                height=350,
                xaxis_title="Hour",
                plot_bgcolor="rgba(0,0,0,0)",
                margin=dict(l=10, r=10, t=10, b=40),
            )
            st.plotly_chart(fig, use_container_width=True)

    with col2:
        st.subheader("Hourly Compliance Rate")
        if not hourly.empty:
            fig = go.Figure(go.Scatter(
                x=hourly["hour"],
                y=hourly["compliance_rate"],
                mode="lines+markers",
                line=dict(color="#10B981", width=2),
            ))
            fig.update_layout(
                height=350,
                xaxis_title="Hour",
                yaxis=dict(range=[0, 100], title="%"),
                plot_bgcolor="rgba(0,0,0,0)",
                margin=dict(l=10, r=10, t=10, b=40),
            )
            st.plotly_chart(fig, use_container_width=True)

    st.subheader("Top Performers")
    top = list(result.guards[:10])
    if top:
        fig = go.Figure(go.Bar(
            x=[g.name for g in top],
            y=[g.performance_score for g in top],
            marker_color=[score_color(g.performance_score) for g in top],
        ))
        fig.update_layout(height=350, yaxis=dict(range=[0, 100]), plot_bgcolor="rgba(0,0,0,0)")
        st.plotly_chart(fig, use_container_width=True)


# ===========================================================================
# PAGE: Personnel Analytics
# ===========================================================================
elif page == "Personnel Analytics":
    st.title("Personnel Analytics")

    col1, col2 = st.columns([2, 1])
    with col1:
        search_term = st.text_input("Search guards...", "")
    with col2:
        location_options = ["All Locations"] + [loc.location for loc in result.locations]
        location_choice = st.selectbox("Location", location_options)

    location = None if location_choice == "All Locations" else location_choice
    matches = filter_guards(result.guards, search_term, location)

    if not matches:
        st.warning("No guards match the current filters.")
    else:
        display_df = guards_frame(matches)[[
            "name", "guard_id", "performance_score", "attendance_rate",
            "activity_compliance_rate", "coverage_count", "duty_hours", "rag",
        ]].copy()
        display_df["duty_hours"] = display_df["duty_hours"].apply(lambda x: f"{x:,.1f}")

        def color_rag(val):
            color = RAG_COLORS.get(val, "#333")
            return f"background-color: {color}22; color: {color}"

        styled = display_df.style.map(color_rag, subset=["rag"])
        st.dataframe(styled, use_container_width=True, hide_index=True)


# ===========================================================================
# PAGE: Coverage Analysis
# ===========================================================================
elif page == "Coverage Analysis":
    st.title("Coverage Analysis")

    locations = locations_frame(result)
    if locations.empty:
        st.warning("No attendance data for this date.")
    else:
        col1, col2 = st.columns(2)
        with col1:
            fig = go.Figure()
            fig.add_trace(go.Bar(x=locations["location"], y=locations["coverage_rate"], name="Coverage Rate", marker_color="#3B82F6"))
            fig.add_trace(go.Bar(x=locations["location"], y=locations["punctuality_rate"], name="Punctuality Rate", marker_color="#10B981"))
            fig.update_layout(title="Coverage & Punctuality", barmode="group", height=380, plot_bgcolor="rgba(0,0,0,0)")
            st.plotly_chart(fig, use_container_width=True)
        with col2:
            fig = go.Figure()
            fig.add_trace(go.Bar(x=locations["location"], y=locations["guard_count"], name="Assigned Guards", marker_color="#3B82F6"))
            fig.add_trace(go.Bar(x=locations["location"], y=locations["average_shift_hours"], name="Avg. Shift Hours", marker_color="#10B981"))
            fig.update_layout(title="Staffing", barmode="group", height=380, plot_bgcolor="rgba(0,0,0,0)")
            st.plotly_chart(fig, use_container_width=True)

        st.subheader("Location Status")
        for loc in result.locations:
            status = classify_coverage(loc.coverage_rate)
            color = COVERAGE_COLORS[status]
            st.markdown(
                f"<div style='border-left: 3px solid {color}; padding: 4px 8px; margin: 4px 0;'>"
                f"<b>{loc.location}</b> — {loc.coverage_rate}% coverage · "
                f"{loc.guard_count} guards · {loc.average_shift_hours} avg. hours/shift · "
                f"<span style='color: {color}; font-weight: 600;'>{status}</span></div>",
                unsafe_allow_html=True,
            )


# ===========================================================================
# PAGE: Compliance
# ===========================================================================
elif page == "Compliance":
    st.title("Compliance")

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Overall Compliance", f"{overview['overall_compliance']}%")
    with col2:
        st.metric("Compliant Locations", overview["compliant_locations"], help="Score of 90% or more")
    with col3:
        st.metric("Compliant Guards", overview["compliant_guards"], help="Score of 90% or more")

    by_location, by_guard = compliance_frames(result)

    tab1, tab2 = st.tabs(["Locations", "Guards"])
    with tab1:
        if by_location.empty:
            st.info("No locations to evaluate.")
        else:
            fig = go.Figure(go.Bar(
                x=by_location["location"],
                y=by_location["compliance_score"],
                marker_color=[score_color(s) for s in by_location["compliance_score"]],
            ))
            fig.update_layout(height=350, yaxis=dict(range=[0, 100]), plot_bgcolor="rgba(0,0,0,0)")
            st.plotly_chart(fig, use_container_width=True)
            st.dataframe(by_location, use_container_width=True, hide_index=True)
    with tab2:
        if by_guard.empty:
            st.info("No guards to evaluate.")
        else:
            st.dataframe(
                by_guard.sort_values("compliance_score", ascending=False, kind="stable"),
                use_container_width=True,
                hide_index=True,
            )
