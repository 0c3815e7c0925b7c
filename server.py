"""
MCP Server for ASME B31.3 pipe pressure-design calculations.

This server provides tools for minimum required wall thickness, allowable
stress lookup with temperature interpolation, and standard schedule selection.

Each tool lives in its own module under tools/; omnitools/ groups them behind
a small number of MCP entry points.
"""

import logging
from mcp.server.fastmcp import FastMCP

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger("pipe-thickness-mcp")

# Initialize the MCP server
mcp = FastMCP("pipe-thickness-calculator")

# Import omnitools (consolidated tools)
from omnitools.pipe_thickness import pipe_thickness
from omnitools.parameter_sweep import parameter_sweep
from omnitools.help_resources import help_resources

# Register omnitools with MCP
mcp.tool()(pipe_thickness)
mcp.tool()(parameter_sweep)
mcp.tool()(help_resources)

from utils.reference_data import default_tables


def main():
    logger.info("Starting Pipe Thickness MCP server...")

    tables = default_tables()
    logger.info("Materials with stress data: %d", len(tables.stress.materials()))
    logger.info("Nominal sizes with schedules: %d", len(tables.schedules.sizes()))

    # Log which omnitools are registered
    logger.info("Registered omnitools:")
    logger.info("  - pipe_thickness: Wall thickness, allowable stress and schedule lookups")
    logger.info("  - parameter_sweep: Thickness sweeps over pressure or temperature")
    logger.info("  - help_resources: Materials, sizes, schedules and design factors")

    # Start the server
    mcp.run()


if __name__ == "__main__":
    main()
