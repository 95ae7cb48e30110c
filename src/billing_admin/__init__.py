"""Billing administration: clients, products, invoices and payments."""

__version__ = "0.1.0"
