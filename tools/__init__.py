"""
Tools package for Pipe Thickness MCP server.

This package contains the individual calculation tools that the omnitools dispatch to.
"""

from .pipe_thickness import calculate_pipe_thickness, pipe_thickness_sweep
from .allowable_stress import get_allowable_stress, get_stress_table, list_materials
from .pipe_schedules import recommend_schedule, get_schedules, list_nominal_sizes

__all__ = [
    'calculate_pipe_thickness',
    'pipe_thickness_sweep',
    'get_allowable_stress',
    'get_stress_table',
    'list_materials',
    'recommend_schedule',
    'get_schedules',
    'list_nominal_sizes',
]
