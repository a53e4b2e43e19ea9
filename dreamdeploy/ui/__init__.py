"""
dreamdeploy UI - Console rendering.
"""

from dreamdeploy.ui.console import ConsoleUI

__all__ = ["ConsoleUI"]
