"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich. Colors and
unicode glyphs follow the user's display settings.
"""

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

from tman.core.settings import Settings

THEME = Theme(
    {
        "name": "bold",
        "origin": "dim italic",
        "version": "cyan",
        "muted": "dim",
        "success": "green",
        "warning": "yellow",
        "error": "bold red",
        "info": "cyan",
    }
)

# Glyph name -> (unicode, ascii)
GLYPHS: dict[str, tuple[str, str]] = {
    "bullet": ("•", "*"),
    "from": ("←", "<-"),
    "version": ("→", "->"),
    "ok": ("✔", "OK"),
    "fail": ("✘", "FAIL"),
}

# Shared console instances; colors stay off until settings enable them
console = Console(theme=THEME, no_color=True, highlight=False, soft_wrap=True)
err_console = Console(
    theme=THEME, stderr=True, no_color=True, highlight=False, soft_wrap=True
)

_settings = Settings()


def apply_settings(settings: Settings) -> None:
    """Apply display settings to the shared consoles and glyphs.

    Args:
        settings: Display preferences to use from now on.
    """
    global _settings
    _settings = settings
    console.no_color = not settings.use_colors
    err_console.no_color = not settings.use_colors


def glyph(name: str) -> str:
    """Return the unicode or ASCII form of a glyph.

    Args:
        name: Key in GLYPHS.

    Returns:
        The unicode glyph if enabled in settings, else its ASCII fallback.
    """
    unicode, ascii_fallback = GLYPHS[name]
    return unicode if _settings.use_unicode else ascii_fallback


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{escape(message)}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{escape(message)}[/]")
