"""ANSI escape helpers for 24-bit colour output."""

from statusline.config import RGB

ESC = "\033"
BEL = "\a"
RESET = f"{ESC}[0m"


def fg(rgb: RGB) -> str:
    """Return the escape sequence selecting a 24-bit foreground colour."""
    r, g, b = rgb
    return f"{ESC}[38;2;{r};{g};{b}m"


def paint(text: str, rgb: RGB) -> str:
    """Colour text and reset afterwards."""
    return f"{fg(rgb)}{text}{RESET}"


def hyperlink(url: str, text: str) -> str:
    """Wrap text in an OSC 8 terminal hyperlink."""
    return f"{ESC}]8;;{url}{BEL}{text}{ESC}]8;;{BEL}"
