"""
Plotly Chart Generators

Generates interactive charts for the draft board and the user's team.
All charts return HTML strings for embedding or standalone use.
"""

import plotly.graph_objects as go
from plotly.subplots import make_subplots

from draft_assistant.models.analysis import TeamAnalysisReport
from draft_assistant.models.draft import DraftState
from draft_assistant.models.player import POSITIONS
from draft_assistant.services.draft_board import draft_board_frame
from draft_assistant.services.recommendations import IDEAL_ROSTER


DARK_THEME = {
    "paper_bgcolor": "#1a1a2e",
    "plot_bgcolor": "#16213e",
    "font_color": "#e8e8e8",
    "gridcolor": "#2d3a4f",
    "colorway": [
        "#00d9ff",
        "#ff6b6b",
        "#4ecdc4",
        "#ffe66d",
        "#a855f7",
        "#f97316",
    ],
}

POSITION_COLORS = {
    "QB": "#e53e3e",
    "RB": "#38a169",
    "WR": "#3182ce",
    "TE": "#805ad5",
    "K": "#d69e2e",
    "D": "#dd6b20",
}
EMPTY_CELL_COLOR = "#16213e"
UNKNOWN_CELL_COLOR = "#4a5568"


def _apply_dark_theme(fig: go.Figure) -> go.Figure:
    """Apply dark theme styling to a figure."""
    fig.update_layout(
        paper_bgcolor=DARK_THEME["paper_bgcolor"],
        plot_bgcolor=DARK_THEME["plot_bgcolor"],
        font={"color": DARK_THEME["font_color"], "family": "Inter, sans-serif"},
        colorway=DARK_THEME["colorway"],
        margin={"l": 60, "r": 40, "t": 60, "b": 60},
    )
    fig.update_xaxes(
        gridcolor=DARK_THEME["gridcolor"],
        linecolor=DARK_THEME["gridcolor"],
    )
    fig.update_yaxes(
        gridcolor=DARK_THEME["gridcolor"],
        linecolor=DARK_THEME["gridcolor"],
    )
    return fig


def draft_board_chart(draft_state: DraftState, title: str | None = None) -> str:
    """
    Create a table of the draft board, cells colored by position.

    Args:
        draft_state: Current draft
        title: Chart title (defaults to the league name)

    Returns:
        HTML string containing the chart
    """
    if not draft_state.teams or draft_state.total_rounds == 0:
        return "<div>No draft board data available</div>"

    frame = draft_board_frame(draft_state)

    # One color list per column, the round column first
    fills = [[DARK_THEME["plot_bgcolor"]] * len(frame.index)]
    for team in draft_state.teams:
        column = [EMPTY_CELL_COLOR] * len(frame.index)
        for record in team.picks:
            if 1 <= record.draft_round <= draft_state.total_rounds:
                column[record.draft_round - 1] = POSITION_COLORS.get(
                    record.position, UNKNOWN_CELL_COLOR
                )
        fills.append(column)

    headers = ["Round"] + [
        f"<b>{team.name}</b> (you)" if team.is_user_team else f"<b>{team.name}</b>"
        for team in draft_state.teams
    ]
    values = [list(frame.index)] + [frame.iloc[:, i].tolist() for i in range(len(frame.columns))]

    fig = go.Figure(
        data=go.Table(
            header={
                "values": headers,
                "fill_color": DARK_THEME["gridcolor"],
                "font": {"color": DARK_THEME["font_color"], "size": 12},
                "align": "center",
            },
            cells={
                "values": values,
                "fill_color": fills,
                "font": {"color": "#ffffff", "size": 11},
                "align": "center",
                "height": 28,
            },
        )
    )

    fig.update_layout(
        title={
            "text": title or f"{draft_state.league_name} - Draft Board",
            "x": 0.5,
            "xanchor": "center",
        },
        height=max(400, 60 + 30 * draft_state.total_rounds),
    )

    _apply_dark_theme(fig)
    return fig.to_html(full_html=False, include_plotlyjs="cdn")


def team_composition_chart(report: TeamAnalysisReport, title: str | None = None) -> str:
    """
    Create roster composition charts for the user's team.

    Shows position counts against the ideal starting roster, projected
    points per position and the tier distribution.

    Args:
        report: Team analysis of the user's team
        title: Chart title

    Returns:
        HTML string containing the chart
    """
    if report.total_players == 0:
        return "<div>No players drafted yet</div>"

    positions = list(POSITIONS)
    fig = make_subplots(
        rows=1,
        cols=3,
        subplot_titles=("Roster vs Ideal", "Projected Points", "Tier Distribution"),
        horizontal_spacing=0.08,
    )

    fig.add_trace(
        go.Bar(
            x=positions,
            y=[report.position_counts.get(p, 0) for p in positions],
            name="Drafted",
            marker_color=[POSITION_COLORS[p] for p in positions],
            text=[report.position_counts.get(p, 0) for p in positions],
            textposition="outside",
        ),
        row=1,
        col=1,
    )
    fig.add_trace(
        go.Scatter(
            x=positions,
            y=[IDEAL_ROSTER[p] for p in positions],
            name="Ideal",
            mode="markers",
            marker={"symbol": "line-ew-open", "size": 28, "color": "#ffe66d", "line": {"width": 3}},
        ),
        row=1,
        col=1,
    )

    fig.add_trace(
        go.Bar(
            x=positions,
            y=[round(report.projected_points.get(p, 0.0), 1) for p in positions],
            name="Projected",
            marker_color=[POSITION_COLORS[p] for p in positions],
            showlegend=False,
        ),
        row=1,
        col=2,
    )

    tiers = sorted(report.tier_counts)
    fig.add_trace(
        go.Bar(
            x=[f"T{t}" for t in tiers],
            y=[report.tier_counts[t] for t in tiers],
            name="Tier",
            marker_color="#00d9ff",
            showlegend=False,
        ),
        row=1,
        col=3,
    )

    fig.update_layout(
        title={
            "text": title
            or f"{report.team_name} - {report.team_type} (balance {report.balance_score}%)",
            "x": 0.5,
            "xanchor": "center",
        },
        height=450,
        barmode="overlay",
    )

    _apply_dark_theme(fig)
    return fig.to_html(full_html=False, include_plotlyjs="cdn")
