"""HTTP surface of the gateway (FastAPI)."""
