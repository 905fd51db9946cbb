"""
Schemas module - Request/Response schemas for API endpoints.

Enums (UserRole, ApplicationStatus, JobSort) live here too, since the
services and the API contract share them.
"""
