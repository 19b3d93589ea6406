"""
Service layer.

Business rules live here; routers only translate HTTP to service calls.
Dependency wiring for FastAPI is in ``deps``.
"""
