"""Database ports for the finance dashboard.

This module defines the application-layer protocol for accessing the
analytics database that stores ETL output. Infrastructure implementations
are expected to provide concrete adapters that satisfy this port.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the analytics database engine.

    Application code can depend on this protocol instead of concrete
    database drivers or configuration details.
    """

    def get_analytics_engine(self) -> Engine:
        """Get the engine for the analytics database.

        Returns:
            Engine: SQLAlchemy engine connected to the analytics layer.
        """


__all__ = ["DatabaseEnginePort"]
