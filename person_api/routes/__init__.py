"""
Person API - Routes Package
============================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - persons.py: /persons CRUD, search and content-negotiated listing
                  (mounted under settings.api_prefix, default /api)
    - health.py:  GET /health (service health check)

Routes stay thin: extract parameters, call PersonService, pick the status
code. Business rules live in the services layer.
"""
