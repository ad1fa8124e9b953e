"""Extension layer — custom rules via pluggy.

Discovery: entry_points (pip-installed) plus single-file plugins from a
local directory.
INVARIANT: Plugin failures are warnings, never errors.
"""

from fieldrules.plugins.hookspecs import hookimpl
from fieldrules.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
