"""
Job Board
Recruiters post jobs and review applicants; applicants apply with resumes.

Architecture:
- MongoDB: users, jobs, applications (resume bytes inline)
- FastAPI: REST API under /api
"""

__version__ = "1.0.0"
