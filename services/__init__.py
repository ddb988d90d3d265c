"""
Service layer.

Each service wraps the business rules for one part of the document
(jobs, parts, users) so the routers only translate HTTP to calls.
"""
