"""
Guard Operations — Security Patrol Analytics Dashboard

Analytics backend that turns the activity report and the post-basis
attendance report into hourly, per-guard and per-location summaries with
compliance scoring.

To swap CSV inputs for a live feed:
    Replace the loader functions in guard_ops_dashboard.loaders with
    queries against the patrol system's API or database. The record types
    in guard_ops_dashboard.models remain unchanged.

To connect to Streamlit/Dash:
    Call dashboard.build_dashboard(activity, attendance, date) to get an
    immutable DashboardResult, then dashboard.get_overview_summary() and
    the *_frame helpers for cards, charts and tables. Use
    session.DashboardSession when reloads can overlap.

To add a compliance check:
    Add an entry to config.COMPLIANCE_CHECKS naming the profile metric and
    threshold, and a matching boolean field on LocationCompliance or
    GuardCompliance in models.
"""
