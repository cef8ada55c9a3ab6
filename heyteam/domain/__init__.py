"""
Domain packages

Each domain pairs pydantic schemas for the portal payloads with the service
objects that call the portal API.
"""
