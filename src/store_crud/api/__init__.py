"""Example FastAPI service wiring CrudHandler to a store."""
