from __future__ import annotations

import io
import logging

import altair as alt
import pandas as pd
import streamlit as st

from engagement_dashboard.aggregate.goal_tracking import (
    compute_cumulative_variance,
    compute_goal_tracking,
    compute_monthly_channel_breakdown,
    compute_monthly_goal_view,
)
from engagement_dashboard.aggregate.projections import (
    compute_required_run_rate,
    compute_scenarios,
    compute_ytd_summary,
)
from engagement_dashboard.aggregate.seasonality import (
    compute_month_by_year,
    compute_quarter_totals,
    compute_seasonal_statistics,
    compute_top_bottom_months,
    seasonal_index,
)
from engagement_dashboard.aggregate.summary import build_dashboard
from engagement_dashboard.aggregate.yearly import (
    compute_annual_goal,
    compute_baseline_trend,
    compute_channel_growth,
    compute_channel_mix,
    compute_channel_performance,
    compute_channel_share,
    compute_channel_trend,
    previous_year_total,
)
from engagement_dashboard.config import get_settings
from engagement_dashboard.constants import CHANNELS
from engagement_dashboard.errors import IngestError
from engagement_dashboard.formatting import (
    format_millions,
    format_pct,
    format_with_commas,
    fy_label,
    to_millions,
)
from engagement_dashboard.ingest.load import load_engagement_data
from engagement_dashboard.ingest.read_csv import is_csv_name
from engagement_dashboard.logging_config import configure_logging
from engagement_dashboard.models import DashboardData, MonthlyGoalEntry

log = logging.getLogger(__name__)

# =====================================================
# Page config
# =====================================================
st.set_page_config(page_title="Engagement Dashboard", layout="wide")
st.title("📊 Digital Media Engagement Dashboard")

settings = get_settings()
configure_logging(settings.log_path, settings.log_level)

CHANNEL_NAMES = {key: name for key, _, name, _ in CHANNELS}
CHANNEL_COLORS = alt.Scale(
    domain=[name for _, _, name, _ in CHANNELS],
    range=[color for _, _, _, color in CHANNELS],
)


# =====================================================
# Helpers
# =====================================================
@st.cache_data(show_spinner=False)
def load_dashboard(content: bytes, name: str) -> tuple[pd.DataFrame, DashboardData | None]:
    """Parse an uploaded file and run the aggregation engine.

    Raises:
        IngestError: if the file is not a readable engagement CSV.
    """
    if not is_csv_name(name):
        raise IngestError(f"{name}: expected a .csv file")
    rows = load_engagement_data(io.BytesIO(content))
    return rows, build_dashboard(rows)


def kpi(label: str, value, help_text: str | None = None) -> None:
    """Display a simple KPI metric in the dashboard."""
    st.metric(label, value, help=help_text)


def year_picker(label: str, years: list[int], default: int, key: str) -> int:
    """Fiscal-year selector; newest first, `default` preselected."""
    options = sorted(years, reverse=True)
    index = options.index(default) if default in options else 0
    return st.selectbox(label, options, index=index, format_func=fy_label, key=key)


def series_for(year: int) -> list[MonthlyGoalEntry]:
    """Goal-tracking series for `year`, computing it if not precomputed."""
    baseline = previous_year_total(data.yearly_totals, year)
    return data.goal_tracking.get(year) or compute_goal_tracking(year, rows, baseline)


# =====================================================
# Data source (upload, else DASHBOARD_DATA_FILE)
# =====================================================
uploaded = st.file_uploader("Upload engagement CSV", type=["csv"])

content: bytes | None = None
source_name = ""
if uploaded is not None:
    content, source_name = uploaded.getvalue(), uploaded.name
elif settings.data_file is not None and settings.data_file.exists():
    content, source_name = settings.data_file.read_bytes(), settings.data_file.name

if content is None:
    st.info("Drop a CSV with FiscalYear, MonthNum and channel columns to begin.")
    st.stop()

try:
    rows, data = load_dashboard(content, source_name)
except IngestError as exc:
    log.warning("Ignoring %s: %s", source_name, exc)
    st.warning(f"Could not load `{source_name}`: {exc}")
    st.stop()

if data is None:
    st.warning("No rows with a fiscal year were found.")
    st.stop()

st.caption(f"✅ Loaded `{source_name}`: {len(rows)} rows, current fiscal year {fy_label(data.current_fy)}")

years = sorted({*data.fiscal_years, data.current_fy})

tab_overview, tab_goals, tab_channels, tab_season, tab_perf, tab_proj = st.tabs(
    ["Overview", "Goal Tracking", "Channels", "Seasonality", "Performance", "Projections"]
)

# =====================================================
# SECTION 0 — OVERVIEW
# =====================================================
with tab_overview:
    ytd = data.current_ytd
    c1, c2, c3, c4 = st.columns(4)
    with c1:
        kpi(f"{fy_label(data.previous_fy)} Baseline", format_millions(data.previous_year_baseline))
    with c2:
        kpi(f"{fy_label(data.current_fy)} Goal (+3%)", format_millions(data.current_year_goal))
    with c3:
        kpi("YTD Actual", format_millions(ytd.ytd_actual), f"{ytd.months_complete} months reported")
    with c4:
        kpi("% of YTD Goal", format_pct(ytd.pct_of_goal), f"{format_with_commas(ytd.ahead_behind)} vs goal")

    prior = data.yearly_totals.get(data.previous_fy)
    if prior is not None:
        cols = st.columns(len(CHANNELS))
        for col, perf in zip(cols, compute_channel_performance(data.yearly_totals, data.previous_fy)):
            with col:
                kpi(perf.name, format_millions(perf.total), f"{format_pct(perf.share_pct, 0)} of total")

    if data.goal_history:
        st.subheader("Goal Achievement History")
        df_hist = pd.DataFrame([h.model_dump() for h in data.goal_history])
        df_hist["year"] = df_hist["year"].map(fy_label)
        df_long = df_hist.melt(id_vars=["year", "pct"], value_vars=["actual", "goal"], var_name="series")
        df_long["value"] = df_long["value"].map(to_millions)
        chart_hist = (
            alt.Chart(df_long)
            .mark_bar()
            .encode(
                x=alt.X("year:N", title=None),
                xOffset="series:N",
                y=alt.Y("value:Q", title="Engagement (M)"),
                color=alt.Color("series:N", title=None),
                tooltip=["year:N", "series:N", alt.Tooltip("value:Q", format=".1f"), "pct:Q"],
            )
            .properties(height=300)
        )
        st.altair_chart(chart_hist, width="stretch")

    st.subheader("Annual Baseline Trend")
    trend = compute_baseline_trend(data.yearly_totals, data.fiscal_years)
    if trend:
        df_trend = pd.DataFrame([t.model_dump() for t in trend])
        df_trend["label"] = df_trend["fiscal_year"].map(fy_label)
        df_trend["baseline_m"] = df_trend["baseline"].map(to_millions)
        chart_trend = (
            alt.Chart(df_trend)
            .mark_bar()
            .encode(
                x=alt.X("label:N", title=None),
                y=alt.Y("baseline_m:Q", title="Total engagement (M)"),
                color=alt.condition("datum.is_max", alt.value("#16a34a"), alt.value("#3b82f6")),
                tooltip=["label:N", alt.Tooltip("baseline:Q", format=","), alt.Tooltip("growth_pct:Q", format=".1f")],
            )
            .properties(height=250)
        )
        st.altair_chart(chart_trend, width="stretch")

# =====================================================
# SECTION 1 — GOAL TRACKING
# =====================================================
with tab_goals:
    goal_year = year_picker("Fiscal year", years, data.current_fy, key="goal_year")
    chart_view = st.radio("View", ["cumulative", "monthly"], horizontal=True, key="goal_view")

    series = series_for(goal_year)
    baseline = previous_year_total(data.yearly_totals, goal_year)
    annual_goal = compute_annual_goal(baseline)
    summary = compute_ytd_summary(goal_year, series, baseline)

    c1, c2, c3 = st.columns(3)
    with c1:
        kpi("Actual" if summary.is_complete else "YTD Actual", format_millions(summary.final_actual))
    with c2:
        kpi("Goal" if summary.is_complete else "YTD Goal", format_millions(summary.final_goal))
    with c3:
        kpi("% of Goal", format_pct(summary.final_pct), format_with_commas(summary.final_actual - summary.final_goal))

    if chart_view == "cumulative":
        df_goal = pd.DataFrame([m.model_dump() for m in series])
        df_goal["vs_goal_pct"] = compute_cumulative_variance(series)
        base = alt.Chart(df_goal).encode(x=alt.X("month:N", sort=list(df_goal["month"]), title=None))
        goal_line = base.mark_area(opacity=0.3, color="#f59e0b").encode(y=alt.Y("goal:Q", title="Cumulative"))
        actual_bars = base.mark_bar(color="#3b82f6").encode(
            y="actual:Q",
            tooltip=[
                "month:N",
                alt.Tooltip("goal:Q", format=","),
                alt.Tooltip("actual:Q", format=","),
                alt.Tooltip("vs_goal_pct:Q", format="+.1f"),
            ],
        )
        st.altair_chart((goal_line + actual_bars).properties(height=320), width="stretch")
    else:
        df_month = pd.DataFrame([v.model_dump() for v in compute_monthly_goal_view(series, annual_goal)])
        base = alt.Chart(df_month).encode(x=alt.X("month:N", sort=list(df_month["month"]), title=None))
        bars = base.mark_bar(color="#3b82f6").encode(
            y=alt.Y("monthly_actual:Q", title="Monthly"),
            tooltip=["month:N", alt.Tooltip("monthly_actual:Q", format=","), alt.Tooltip("vs_goal_pct:Q", format="+.1f")],
        )
        goal_rule = base.mark_line(color="#f59e0b", strokeDash=[4, 4]).encode(y="monthly_goal:Q")
        st.altair_chart((bars + goal_rule).properties(height=320), width="stretch")

# =====================================================
# SECTION 2 — CHANNELS
# =====================================================
with tab_channels:
    st.subheader("Channel Mix Evolution")
    mix = compute_channel_mix(data.yearly_totals, data.current_fy)
    if mix:
        df_mix = pd.DataFrame(
            [
                {"year": fy_label(fy), "channel": CHANNEL_NAMES[key], "value": to_millions(getattr(t, key))}
                for fy, t in mix.items()
                for key in CHANNEL_NAMES
            ]
        )
        chart_mix = (
            alt.Chart(df_mix)
            .mark_bar()
            .encode(
                x=alt.X("year:N", title=None),
                xOffset="channel:N",
                y=alt.Y("value:Q", title="Engagement (M)"),
                color=alt.Color("channel:N", scale=CHANNEL_COLORS, title=None),
                tooltip=["year:N", "channel:N", alt.Tooltip("value:Q", format=".1f")],
            )
            .properties(height=300)
        )
        st.altair_chart(chart_mix, width="stretch")
    else:
        st.info("No complete fiscal year yet.")

    st.subheader("Channel Growth Trends")
    df_ch_trend = pd.DataFrame(
        [
            {"year": fy_label(fy), "channel": CHANNEL_NAMES[key], "value": to_millions(getattr(t, key))}
            for fy, t in compute_channel_trend(data.yearly_totals).items()
            for key in CHANNEL_NAMES
        ]
    )
    chart_ch_trend = (
        alt.Chart(df_ch_trend)
        .mark_line(point=True)
        .encode(
            x=alt.X("year:N", title=None),
            y=alt.Y("value:Q", title="Engagement (M)"),
            color=alt.Color("channel:N", scale=CHANNEL_COLORS, title=None),
            tooltip=["year:N", "channel:N", alt.Tooltip("value:Q", format=".1f")],
        )
        .properties(height=300)
    )
    st.altair_chart(chart_ch_trend, width="stretch")

    st.subheader("Channel Distribution")
    share_year = year_picker("Fiscal year", sorted(data.yearly_totals), data.previous_fy, key="share_year")
    df_share = pd.DataFrame([s.model_dump() for s in compute_channel_share(data.yearly_totals, share_year)])
    chart_share = (
        alt.Chart(df_share)
        .mark_arc(outerRadius=110)
        .encode(
            theta=alt.Theta("total:Q"),
            color=alt.Color("name:N", scale=CHANNEL_COLORS, title=None),
            tooltip=["name:N", alt.Tooltip("total:Q", format=","), alt.Tooltip("share_pct:Q", format=".0f")],
        )
        .properties(height=280)
    )
    st.altair_chart(chart_share, width="stretch")

    st.subheader("Channel Performance")
    channel_year = year_picker("Fiscal year", years, data.previous_fy, key="channel_year")
    cols = st.columns(len(CHANNELS))
    for col, perf in zip(cols, compute_channel_performance(data.yearly_totals, channel_year)):
        with col:
            kpi(
                perf.name,
                format_millions(perf.total),
                f"{format_pct(perf.share_pct)} of total, {format_pct(perf.growth_pct, signed=True)} vs {fy_label(channel_year - 1)}",
            )

    growth = compute_channel_growth(data.yearly_totals, data.current_fy)
    if growth:
        st.subheader(f"Growth {fy_label(growth[0].first_year)} → {fy_label(growth[0].last_year)}")
        st.dataframe(
            pd.DataFrame([g.model_dump() for g in growth])[["name", "growth_pct"]],
            width="stretch",
        )

# =====================================================
# SECTION 3 — SEASONALITY
# =====================================================
with tab_season:
    st.subheader("Monthly Engagement Patterns")
    stats = compute_seasonal_statistics(rows)
    df_season = pd.DataFrame([s.model_dump() for s in stats])
    df_season["vs_avg_pct"] = seasonal_index(stats)
    month_order = list(df_season["month"])
    base = alt.Chart(df_season).encode(x=alt.X("month:N", sort=month_order, title=None))
    chart_season = (
        base.mark_bar(color="#3b82f6").encode(
            y=alt.Y("average:Q", title="Monthly total"),
            tooltip=["month:N", alt.Tooltip("average:Q", format=",.0f"), "max:Q", "min:Q", "count:Q",
                     alt.Tooltip("vs_avg_pct:Q", format="+.0f")],
        )
        + base.mark_line(color="#16a34a").encode(y="max:Q")
        + base.mark_line(color="#dc2626").encode(y="min:Q")
    ).properties(height=300)
    st.altair_chart(chart_season, width="stretch")

    st.subheader("Quarterly Breakdown")
    season_year = year_picker("Fiscal year", years, data.previous_fy, key="season_year")
    df_q = pd.DataFrame([q.model_dump() for q in compute_quarter_totals(season_year, rows)])
    df_q["total_m"] = df_q["total"].map(to_millions)
    chart_q = (
        alt.Chart(df_q)
        .mark_bar()
        .encode(
            y=alt.Y("label:N", sort=list(df_q["label"]), title=None),
            x=alt.X("total_m:Q", title="Engagement (M)"),
            tooltip=["label:N", alt.Tooltip("total:Q", format=",")],
        )
        .properties(height=200)
    )
    st.altair_chart(chart_q, width="stretch")

    st.subheader("Top & Bottom Performing Months")
    top, bottom = compute_top_bottom_months(rows)
    c1, c2 = st.columns(2)
    for col, title, ranked in ((c1, "🏆 Top 5 Months", top), (c2, "📉 Bottom 5 Months", bottom)):
        with col:
            st.markdown(f"**{title}**")
            st.dataframe(
                pd.DataFrame(
                    [
                        {"Month": f"{m.month} {fy_label(m.fiscal_year)}", "Total": format_millions(m.total)}
                        for m in ranked
                    ]
                ),
                hide_index=True,
                width="stretch",
            )

    st.subheader("Month-over-Month Comparison by Year")
    df_by_year = pd.DataFrame(
        [
            {"month": c.month, "year": fy_label(fy), "value": to_millions(total)}
            for c in compute_month_by_year(rows)
            for fy, total in c.totals.items()
        ]
    )
    chart_by_year = (
        alt.Chart(df_by_year)
        .mark_line(point=True)
        .encode(
            x=alt.X("month:N", sort=month_order, title=None),
            y=alt.Y("value:Q", title="Engagement (M)"),
            color=alt.Color("year:N", title=None),
            tooltip=["month:N", "year:N", alt.Tooltip("value:Q", format=".1f")],
        )
        .properties(height=320)
    )
    st.altair_chart(chart_by_year, width="stretch")

# =====================================================
# SECTION 4 — PERFORMANCE
# =====================================================
with tab_perf:
    perf_year = year_picker("Fiscal year", years, data.current_fy, key="perf_year")
    perf_series = series_for(perf_year)
    perf = compute_ytd_summary(perf_year, perf_series, previous_year_total(data.yearly_totals, perf_year))

    cols = st.columns(6)
    metrics = [
        ("YTD Actual", format_millions(perf.ytd_actual)),
        ("YTD Goal", format_millions(perf.ytd_goal)),
        ("Avg/Month", format_millions(perf.avg_monthly)),
        ("Projected Annual", format_millions(perf.projected_annual)),
        ("Run Rate vs Goal", format_pct(perf.run_rate_pct)),
        ("Daily Avg", format_with_commas(perf.daily_avg)),
    ]
    for col, (label, value) in zip(cols, metrics):
        with col:
            kpi(label, value)

    goal_progress = perf.ytd_actual / perf.annual_goal if perf.annual_goal else 0.0
    st.progress(min(max(goal_progress, 0.0), 1.0),
                text=f"Annual goal progress: {format_millions(perf.ytd_actual)} of {format_millions(perf.annual_goal)}")
    st.progress(min(max(perf.pace_vs_expected_pct / 100.0, 0.0), 1.0),
                text=f"Pacing vs expected ({perf.months_complete} mo): {format_pct(perf.pace_vs_expected_pct)}")

    st.subheader(f"{fy_label(perf_year)} Monthly Breakdown")
    breakdown = compute_monthly_channel_breakdown(perf_series, perf.annual_goal)
    df_breakdown = pd.DataFrame(
        [
            {
                "Month": b.month,
                **{
                    CHANNEL_NAMES[key]: format_millions(getattr(b, key)) if b.has_data else "-"
                    for key in CHANNEL_NAMES
                },
                "Total": format_millions(b.total) if b.has_data else "-",
                "vs Goal": format_pct(b.vs_goal_pct, signed=True),
            }
            for b in breakdown
        ]
    )
    st.dataframe(df_breakdown, hide_index=True, width="stretch")

# =====================================================
# SECTION 5 — PROJECTIONS
# =====================================================
with tab_proj:
    proj_year = year_picker("Fiscal year", years, data.current_fy, key="proj_year")
    proj = compute_ytd_summary(proj_year, series_for(proj_year), previous_year_total(data.yearly_totals, proj_year))

    st.subheader("Year-End Scenarios")
    scenarios = compute_scenarios(proj.ytd_actual, proj.months_complete, proj.annual_goal)
    cols = st.columns(len(scenarios))
    for col, s in zip(cols, scenarios):
        with col:
            kpi(s.name, format_millions(s.year_end), f"{format_pct(s.pct_of_goal)} of goal")

    st.subheader("Required Run Rate")
    run_rate = compute_required_run_rate(proj.annual_goal, proj.ytd_actual, proj.months_complete)
    c1, c2, c3 = st.columns(3)
    with c1:
        kpi("Required / Month", format_millions(run_rate.required_monthly))
    with c2:
        kpi("Current Avg / Month", format_millions(run_rate.avg_monthly))
    with c3:
        kpi("Change Required", format_pct(run_rate.change_required_pct, signed=True),
            f"{run_rate.months_remaining} months remaining")

# =====================================================
# Footer
# =====================================================
st.caption("Goal: 3% annual growth over previous fiscal year baseline • Fiscal year runs Oct–Sep")
