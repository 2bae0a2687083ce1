"""SQL statement state, a query shell, and row formatters for Access database front-ends."""

__version__ = "0.1.0"