"""NiceGUI-based web UI for Invierte Ya.

Importing `invierte_ya_web.ui` does not eagerly import NiceGUI; pages and
components do.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
