"""
Service layer.

Services hold the business rules of each resource and are independent
of FastAPI; they receive their repositories from the caller.
"""
