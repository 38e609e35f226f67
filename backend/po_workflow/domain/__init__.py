"""Domain layer for the purchase order workflow."""
