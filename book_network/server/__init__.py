"""
Book Network Server Package.

This package contains the web server implementation for the Book Network platform.
It includes the API definition, core service logic, and configuration.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Core configurations, database connections, and dependencies.
    exception_handlers: Mapping of domain errors to HTTP responses.
    middleware: Request logging middleware.
    services: Business logic and service layer.
"""
