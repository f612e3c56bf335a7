"""HTTP API for dexquote."""
