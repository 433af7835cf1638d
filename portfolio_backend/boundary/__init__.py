"""
Boundary layer for external system integrations.

Handles all interactions with external systems (relational database, S3).
Provides adapters and clients for infrastructure dependencies.
"""
