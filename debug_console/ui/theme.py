"""Custom themes for the debug console.

Both themes carry extra variables for the console output styles, so log
records follow the active theme.
"""

from typing import Dict, Optional

from textual.theme import Theme

from ..core.output import OutputStyle


# Console Dark Theme - the default
CONSOLE_DARK = Theme(
    name="console-dark",
    primary="#4A9EFF",  # Bright blue for primary actions
    secondary="#7B68EE",  # Purple for secondary elements
    background="#0F1419",  # Deep charcoal for main background
    surface="#1A1F26",  # Slightly lighter for surfaces
    panel="#252B35",  # Even lighter for panels
    accent="#00D4AA",  # Teal for highlights
    warning="#FFB648",
    error="#FF5C5C",
    success="#00D98C",
    foreground="#E8E8E8",
    variables={
        "text-muted": "#888888",
        "border": "#404854",
        # Console output styles
        "console-normal": "#E8E8E8",
        "console-echo": "#00FFFF",  # Aqua, the echoed input line
        "console-error": "#FFFF00",  # Yellow, evaluation failures
        "console-info": "#ADFF2F",  # Green-yellow, welcome and listings
    },
)


# Console Light Theme
CONSOLE_LIGHT = Theme(
    name="console-light",
    primary="#2563EB",
    secondary="#7C3AED",
    background="#FFFFFF",
    surface="#F9FAFB",
    panel="#F3F4F6",
    accent="#0D9488",
    warning="#F59E0B",
    error="#DC2626",
    success="#10B981",
    foreground="#1F2937",
    variables={
        "text-muted": "#9CA3AF",
        "border": "#E5E7EB",
        "console-normal": "#1F2937",
        "console-echo": "#0E7490",
        "console-error": "#B45309",
        "console-info": "#4D7C0F",
    },
)

# Used for themes that do not define the console variables
DEFAULT_OUTPUT_STYLES = {
    OutputStyle.NORMAL: "",
    OutputStyle.ECHO: "cyan",
    OutputStyle.ERROR: "yellow",
    OutputStyle.INFO: "green_yellow",
}


def get_themes() -> Dict[str, Theme]:
    """Get all console themes.

    Returns:
        Dict mapping theme names to Theme objects
    """
    return {
        "console-dark": CONSOLE_DARK,
        "console-light": CONSOLE_LIGHT,
    }


def get_output_styles(theme: Optional[Theme]) -> Dict[OutputStyle, str]:
    """Map output styles to Rich style strings for the given theme.

    Args:
        theme: Active theme, or None

    Returns:
        Dict mapping each OutputStyle to a Rich style string
    """
    styles = dict(DEFAULT_OUTPUT_STYLES)
    if theme is None:
        return styles
    for style in OutputStyle:
        color = theme.variables.get(f"console-{style.value}")
        if color:
            styles[style] = color
    return styles
