"""Status workflow HTTP adapter."""
