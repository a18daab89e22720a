"""Render pipeline: StructuredResponse -> ordered widget views."""

from typing import Callable

from ..logging_config import get_logger
from ..models import StructuredResponse, Widget, WidgetKind, normalize_steps
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

logger = get_logger(__name__)

Renderer = Callable[[Widget, int, StructuredResponse], WidgetView]


def _text_panel(widget: Widget, index: int, response: StructuredResponse) -> WidgetView:
    return TextPanelView(kind=widget.kind, title=widget.title, index=index, text=widget.text)


def _code(widget: Widget, index: int, response: StructuredResponse) -> WidgetView:
    return CodeView(kind=widget.kind, title=widget.title, index=index, source=widget.text)


def _steps(widget: Widget, index: int, response: StructuredResponse) -> WidgetView:
    # Content is normalized at validation; normalize_steps is a no-op on Step lists
    steps = normalize_steps(widget.content)
    return StepsView(
        kind=widget.kind,
        title=widget.title,
        index=index,
        steps=tuple(
            StepView(number=n, title=step.title, description=step.description)
            for n, step in enumerate(steps, start=1)
        ),
    )


def _chart(widget: Widget, index: int, response: StructuredResponse) -> WidgetView:
    return ChartView(kind=widget.kind, title=widget.title, index=index, data=widget.text)


def _prototype(widget: Widget, index: int, response: StructuredResponse) -> WidgetView:
    device = "mobile" if "mobile" in response.domain.lower() else "desktop"
    return PrototypeView(
        kind=widget.kind,
        title=widget.title,
        index=index,
        markup=widget.text,
        device=device,
    )


def _security_report(widget: Widget, index: int, response: StructuredResponse) -> WidgetView:
    return SecurityReportView(kind=widget.kind, title=widget.title, index=index, text=widget.text)


RENDERERS: dict[str, Renderer] = {
    WidgetKind.CODE.value: _code,
    WidgetKind.STEPS.value: _steps,
    WidgetKind.IMPACT.value: _text_panel,
    WidgetKind.CHART.value: _chart,
    WidgetKind.SUMMARY.value: _text_panel,
    WidgetKind.PROTOTYPE.value: _prototype,
    WidgetKind.SECURITY_REPORT.value: _security_report,
}


def render(response: StructuredResponse) -> tuple[WidgetView, ...]:
    """Map each known widget to a view, in order. Never raises on widget content."""
    views: list[WidgetView] = []
    for index, widget in enumerate(response.widgets):
        renderer = RENDERERS.get(widget.kind)
        if renderer is None:
            logger.debug("Skipping widget %d of unknown kind %r", index, widget.kind)
            continue
        try:
            views.append(renderer(widget, index, response))
        except Exception:
            logger.warning("Failed to render %s widget %d", widget.kind, index, exc_info=True)
            views.append(PlaceholderView(kind=widget.kind, title=widget.title, index=index))
    return tuple(views)


def render_insight(response: StructuredResponse) -> InsightView:
    """Render the widgets plus the top-level fields of the insight panel."""
    return InsightView(
        domain=response.domain,
        analysis=response.analysis,
        impact_score=response.impact_score,
        suggested_actions=tuple(response.suggested_actions),
        export_options=tuple(response.export_options),
        alert=response.error,
        widgets=render(response),
    )
