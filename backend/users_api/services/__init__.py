# Services package init
"""
Users API - Services Layer
===========================

What:  Business logic sitting between routes (HTTP) and the data it manages.

Service Inventory:
    - UserStore: In-memory, thread-safe owner of user records and id allocation

The store can be unit-tested without HTTP, and routes never touch its
internal collection.
"""
