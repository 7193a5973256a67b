"""Theme color lookup for chart segments."""

import re

DEFAULT_COLORS = {
    "chart-background-m": "b1cff0",
    "chart-background-f": "e9daf1",
    "chart-background-u": "eeeeee",
    "chart-font-color": "000000",
}

HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")


class ThemeColors:
    """Resolves theme parameters to six digit hex colors (without the leading ``#``)."""

    def __init__(self, overrides: dict[str, str] | None = None):
        self._colors = dict(DEFAULT_COLORS)
        for key, value in (overrides or {}).items():
            match = HEX_RE.match(str(value).strip())
            if match is None:
                raise ValueError(f"Theme color {key!r} is not a hex color: {value!r}")
            self._colors[key] = match.group(1).lower()

    def parameter(self, key: str) -> str:
        # Unknown sexes share the neutral background
        return self._colors.get(key, self._colors["chart-background-u"])
