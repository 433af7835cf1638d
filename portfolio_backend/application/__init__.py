"""
Application layer.

Use case orchestration over the database and blob store boundaries.
"""
