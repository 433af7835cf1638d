"""
Portfolio backend.

Keeps portfolio records (relational store) and their media (S3 blob store)
consistent across create, update and delete.
"""
