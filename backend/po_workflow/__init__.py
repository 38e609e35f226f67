"""PO Workflow - purchase order status workflow engine and HTTP adapter."""

__version__ = "1.0.0"
