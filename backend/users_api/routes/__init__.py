# Routes package init
"""
Users API - API Routes Package
===============================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - users.py:   GET    /api/users          (list users)
                  GET    /api/users/{id}     (get one user)
                  POST   /api/users          (create user)
                  PUT    /api/users/{id}     (partial update)
                  DELETE /api/users/{id}     (delete user)
    - health.py:  GET    /health             (liveness probe)

Routes are thin: they extract input, call the UserStore, and set status
codes and headers. Business rules live in services/user_store.py.
"""
