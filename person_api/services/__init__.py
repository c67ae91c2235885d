"""
Person API - Services Layer
============================

What:  Business logic layer sitting between routes (HTTP) and repositories.
How:   Services receive their repository through the constructor, apply
       business rules, and return ORM objects for the routes to serialize.

Service Inventory:
    - PersonService: lookups with not-found handling, CRUD, name search
"""
