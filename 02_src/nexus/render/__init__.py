"""Render module."""

from .pipeline import RENDERERS, render, render_insight
from .views import (
    ChartView,
    CodeView,
    InsightView,
    PlaceholderView,
    PrototypeView,
    SecurityReportView,
    StepsView,
    StepView,
    TextPanelView,
    WidgetView,
)

__all__ = [
    "RENDERERS",
    "render",
    "render_insight",
    "ChartView",
    "CodeView",
    "InsightView",
    "PlaceholderView",
    "PrototypeView",
    "SecurityReportView",
    "StepsView",
    "StepView",
    "TextPanelView",
    "WidgetView",
]
