"""
Omnitools for the Pipe Thickness MCP server.

Each omnitool consolidates related tools behind a single MCP entry point.
"""

from .pipe_thickness import pipe_thickness
from .parameter_sweep import parameter_sweep
from .help_resources import help_resources

__all__ = [
    'pipe_thickness',
    'parameter_sweep',
    'help_resources',
]
