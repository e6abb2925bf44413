"""Profile cutting-stock optimization for aluminium fabrication."""

__version__ = "1.0.0"
