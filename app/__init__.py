"""
JobSpeedy AI Admin Backend
CRUD API for candidates, jobs, applications and clients with AI assists.

Architecture:
- PostgreSQL: every record, accessed with parameterized raw SQL
- OpenAI: job ad generation and resume extraction only
- reportlab / XML templates: document exports
"""

__version__ = "1.0.0"
