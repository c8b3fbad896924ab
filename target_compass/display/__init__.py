"""Display package - renderers for navigation snapshots."""

from .console_display import NavigationDisplay, ConsoleDisplay, HINTS

__all__ = ['NavigationDisplay', 'ConsoleDisplay', 'HINTS']
