import altair as alt
from itertools import cycle, islice


# tableau20 colors from
# https://vega.github.io/vega/docs/schemes/
# Listed as (full, light) pairs.
COLORS_TABLEAU20 = {
    "SteelBlue": "#4c78a8",
    "SkyBlue": "#9ecae9",
    "Tangerine": "#f58518",
    "Apricot": "#ffbf79",
    "LeafGreen": "#54a24b",
    "PastelGreen": "#88d27a",
    "MustardYellow": "#b79a20",
    "PaleGold": "#f2cf5b",
    "Teal": "#439894",
    "Aqua": "#83bcb6",
    "CoralRed": "#e45756",
    "SalmonPink": "#ff9d98",
    "WarmGray": "#79706e",
    "AshGray": "#bab0ac",
    "DustyRose": "#d67195",
    "PastelPink": "#fcbfd2",
    "Mauve": "#b279a2",
    "Lavender": "#d6a5c9",
    "CocoaBrown": "#9e765f",
    "Tan": "#d8b5a5",
}

AXIS_COLOR = "#404040"
LABEL_COLOR = "#595959"


class Tab20:
    """Tableau 20 series colors, starting at a given color.

    Full colors come first when start_color is a full color, light colors
    otherwise. Both halves are rotated by the same offset so that series
    i of the primary half pairs with series i of the secondary half.
    """

    def __init__(self, start_color: str = "SteelBlue"):
        if start_color not in COLORS_TABLEAU20:
            raise ValueError(f"{start_color} not found in palette keys.")

        keys = list(COLORS_TABLEAU20)
        full_keys, light_keys = keys[0::2], keys[1::2]
        is_full = start_color in full_keys
        idx = (full_keys if is_full else light_keys).index(start_color)

        full = [COLORS_TABLEAU20[k] for k in full_keys[idx:] + full_keys[:idx]]
        light = [COLORS_TABLEAU20[k] for k in light_keys[idx:] + light_keys[:idx]]
        self._primary, self._secondary = (full, light) if is_full else (light, full)

    def colors(self) -> list[str]:
        return self._primary + self._secondary

    def color(self, index: int) -> str:
        """Returns the color of the index-th series (cycling)."""
        colors = self.colors()
        return colors[index % len(colors)]

    def first_n(self, n: int) -> list[str]:
        return list(islice(cycle(self.colors()), n))

    def scale(self, domain: list[str]) -> alt.Scale:
        return alt.Scale(domain=list(domain), range=self.first_n(len(domain)))

    def invert(self) -> "Tab20":
        """Returns a copy of self with primary and secondary colors swapped."""
        obj = Tab20.__new__(Tab20)  # bypass __init__
        obj._primary = list(self._secondary)
        obj._secondary = list(self._primary)
        return obj

    def __str__(self) -> str:
        return f"{self.__class__.__name__}({self.colors()})"
