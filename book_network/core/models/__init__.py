"""
Core models package.

- domain: enums describing lending events, token purposes and roles
- io: Pydantic request/response schemas for the HTTP API
"""
