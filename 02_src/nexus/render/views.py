"""Widget views handed to the presentation layer."""

import html
from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class WidgetView:
    """Base view. ``index`` is the widget's position in the response."""

    kind: str
    title: str
    index: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TextPanelView(WidgetView):
    """impact and summary widgets."""

    text: str


@dataclass(frozen=True)
class CodeView(WidgetView):
    source: str


@dataclass(frozen=True)
class StepView:
    number: int
    title: str
    description: str | None = None


@dataclass(frozen=True)
class StepsView(WidgetView):
    steps: tuple[StepView, ...]


@dataclass(frozen=True)
class ChartView(WidgetView):
    data: str
    caption: str = "VISUALIZATION RENDERED"


@dataclass(frozen=True)
class PrototypeView(WidgetView):
    """Untrusted markup, only ever shown inside a sandboxed frame."""

    markup: str
    device: str  # "mobile" | "desktop"
    sandbox: str = ""  # empty sandbox attribute: no scripts, no same-origin

    def iframe(self) -> str:
        return (
            f'<iframe title="{html.escape(self.title, quote=True)}" '
            f'sandbox="{self.sandbox}" '
            f'srcdoc="{html.escape(self.markup, quote=True)}"></iframe>'
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["iframe"] = self.iframe()
        return data


@dataclass(frozen=True)
class SecurityReportView(WidgetView):
    text: str
    heading: str = "Risk Assessment"
    priority: str = "HIGH PRIORITY"


@dataclass(frozen=True)
class PlaceholderView(WidgetView):
    """Neutral stand-in for a widget whose content could not be rendered."""

    text: str = ""


@dataclass(frozen=True)
class InsightView:
    """Everything the insight panel shows for one response."""

    domain: str
    analysis: str
    impact_score: int
    suggested_actions: tuple[str, ...]
    export_options: tuple[str, ...]
    alert: bool
    widgets: tuple[WidgetView, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "domain": self.domain,
            "analysis": self.analysis,
            "impact_score": self.impact_score,
            "suggested_actions": list(self.suggested_actions),
            "export_options": list(self.export_options),
            "alert": self.alert,
            "widgets": [w.to_dict() for w in self.widgets],
        }
