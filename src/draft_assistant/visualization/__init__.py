"""Plotly visualizations."""

from draft_assistant.visualization.charts import draft_board_chart, team_composition_chart

__all__ = ["draft_board_chart", "team_composition_chart"]
