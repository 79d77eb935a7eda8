"""Logistix: urea delivery operations, invoicing and accent-free receipts."""

__version__ = "0.1.0"
