"""HTTP service for managing TODO items stored in an SQL database."""

__version__ = "0.1.0"