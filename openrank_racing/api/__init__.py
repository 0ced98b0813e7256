"""
HTTP API for the racing bar service.

Import ``openrank_racing.api.main:app`` to serve it.
"""
