"""HTTP application: FastAPI app factory and dependency wiring."""
