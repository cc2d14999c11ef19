"""Intake bounded context: accepting and listing customer orders.

Orders arrive as JSON over HTTP, are written across the relational order
schema in one transaction, and are kept in memory for listing.
"""

from protean.domain import Domain

from intake.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

intake = Domain(name="intake")
