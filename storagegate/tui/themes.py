"""Themes for the storagegate shell"""

from textual.theme import Theme

STORAGEGATE_DARK = Theme(
    name="storagegate-dark",
    primary="#3d4550",
    secondary="#5dd9c1",
    accent="#5dd9c1",
    foreground="#d4d4d4",
    background="#0d1117",
    surface="#161b22",
    panel="#21262d",
    success="#3fb950",
    warning="#d29922",
    error="#f85149",
    dark=True,
    variables={
        "modal-bg": "#161b22",
        "text-muted": "#8b949e",
        "border-color": "#30363d",
    },
)

STORAGEGATE_LIGHT = Theme(
    name="storagegate-light",
    primary="#57606a",
    secondary="#0969da",
    accent="#0969da",
    foreground="#24292f",
    background="#ffffff",
    surface="#f6f8fa",
    panel="#eaeef2",
    success="#1a7f37",
    warning="#9a6700",
    error="#cf222e",
    dark=False,
    variables={
        "modal-bg": "#ffffff",
        "text-muted": "#57606a",
        "border-color": "#d0d7de",
    },
)

THEMES = {
    STORAGEGATE_DARK.name: STORAGEGATE_DARK,
    STORAGEGATE_LIGHT.name: STORAGEGATE_LIGHT,
}

DEFAULT_THEME = STORAGEGATE_DARK.name


def get_theme(name: str) -> Theme:
    """Look up a theme by name, falling back to the default."""
    return THEMES.get(name, THEMES[DEFAULT_THEME])
