"""Drawing surfaces the render pipeline draws on."""

import abc
from xml.sax.saxutils import escape, quoteattr

from pydantic import BaseModel

from .colors import AXIS_COLOR, LABEL_COLOR


class Surface(abc.ABC):
    """Minimal drawing API used by the render pipeline."""

    @abc.abstractmethod
    def clear(self): ...

    @abc.abstractmethod
    def line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        *,
        css_class: str,
        stroke: str = AXIS_COLOR,
        stroke_width: float = 1.0,
        dash: str | None = None,
    ): ...

    @abc.abstractmethod
    def text(
        self,
        x: float,
        y: float,
        content: str,
        *,
        css_class: str,
        anchor: str = "middle",
        fill: str = LABEL_COLOR,
    ): ...

    @abc.abstractmethod
    def polyline(
        self,
        points: list[tuple[float, float]],
        *,
        css_class: str,
        stroke: str,
        stroke_width: float,
        dash: str | None = None,
    ): ...

    @abc.abstractmethod
    def circle(
        self,
        cx: float,
        cy: float,
        r: float,
        *,
        css_class: str,
        fill: str,
        tooltip: str,
    ): ...


class SvgElement(BaseModel):
    tag: str
    attrs: dict[str, str] = {}
    text: str | None = None
    # Rendered as a <title> child, which browsers show as a tooltip.
    title: str | None = None

    @property
    def css_class(self) -> str:
        return self.attrs.get("class", "")

    def to_svg(self) -> str:
        attrs = "".join(f" {k}={quoteattr(v)}" for k, v in self.attrs.items())
        if self.title is not None:
            return f"<{self.tag}{attrs}><title>{escape(self.title)}</title></{self.tag}>"
        if self.text is not None:
            return f"<{self.tag}{attrs}>{escape(self.text)}</{self.tag}>"
        return f"<{self.tag}{attrs}/>"


def _num(v: float) -> str:
    return f"{v:.2f}"


class SvgSurface(Surface):
    """Collects SVG elements in memory.

    The element list can be inspected directly; to_svg() returns a
    standalone SVG document.
    """

    def __init__(self, width: float, height: float):
        self.width = width
        self.height = height
        self.elements: list[SvgElement] = []

    def clear(self):
        self.elements = []

    def find(self, css_class: str) -> list[SvgElement]:
        return [e for e in self.elements if e.css_class == css_class]

    def line(
        self,
        x1,
        y1,
        x2,
        y2,
        *,
        css_class,
        stroke=AXIS_COLOR,
        stroke_width=1.0,
        dash=None,
    ):
        attrs = {
            "class": css_class,
            "x1": _num(x1),
            "y1": _num(y1),
            "x2": _num(x2),
            "y2": _num(y2),
            "stroke": stroke,
            "stroke-width": _num(stroke_width),
        }
        if dash:
            attrs["stroke-dasharray"] = dash
        self.elements.append(SvgElement(tag="line", attrs=attrs))

    def text(self, x, y, content, *, css_class, anchor="middle", fill=LABEL_COLOR):
        self.elements.append(
            SvgElement(
                tag="text",
                attrs={
                    "class": css_class,
                    "x": _num(x),
                    "y": _num(y),
                    "text-anchor": anchor,
                    "fill": fill,
                },
                text=content,
            )
        )

    def polyline(self, points, *, css_class, stroke, stroke_width, dash=None):
        attrs = {
            "class": css_class,
            "points": " ".join(f"{_num(x)},{_num(y)}" for x, y in points),
            "fill": "none",
            "stroke": stroke,
            "stroke-width": _num(stroke_width),
        }
        if dash:
            attrs["stroke-dasharray"] = dash
        self.elements.append(SvgElement(tag="polyline", attrs=attrs))

    def circle(self, cx, cy, r, *, css_class, fill, tooltip):
        self.elements.append(
            SvgElement(
                tag="circle",
                attrs={
                    "class": css_class,
                    "cx": _num(cx),
                    "cy": _num(cy),
                    "r": _num(r),
                    "fill": fill,
                },
                title=tooltip,
            )
        )

    def to_svg(self) -> str:
        body = "\n".join(e.to_svg() for e in self.elements)
        return (
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{_num(self.width)}"'
            f' height="{_num(self.height)}" viewBox="0 0 {_num(self.width)} {_num(self.height)}"'
            f' font-family="sans-serif" font-size="11">\n{body}\n</svg>\n'
        )
