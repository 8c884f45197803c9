"""Tasks vertical: in-memory to-do list service.

- Task dataclass record with injected extra fields
- In-memory repository with filters and status transitions
- FastAPI router with OpenAPI documentation
- Dataclass configuration
"""
