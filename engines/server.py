"""
Paie Maroc Calculation Engine - MCP Server

FastMCP server exposing the Moroccan payroll engine:
- calculate_moroccan_payslip: one employee, one month
- calculate_payslip_batch: many employees, per-employee failures
- get_statutory_tables: rates, ceilings and brackets in use
"""

import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Importing the tool module registers the tools with the MCP server
from engines.tools.payroll_engine import mcp  # noqa: E402

from engines.services.statutory_constants import get_statutory_constants  # noqa: E402

# Configure the MCP server
mcp.name = "Paie Maroc Calculation Engine"


def main():
    """Run the MCP server."""
    # A malformed constants table must fail here, not on the first request
    constants = get_statutory_constants()
    logger.info(
        f"Starting Paie Maroc Calculation Engine MCP Server (constants {constants.version})"
    )
    mcp.run()


if __name__ == "__main__":
    main()
