"""
CRUD operations (Create, Read, Update, Delete) for the database tables.

This layer sits between the API routes and the database: it builds the
parameterized SQL, runs it, and raises typed errors for missing rows and
bad input.
"""

from app.crud import company, job, user

__all__ = ["company", "job", "user"]
