"""
Users API - Request Dependencies
=================================

What:  FastAPI dependency that hands route handlers the application's store.
How:   create_app() attaches one UserStore to `app.state.user_store`; this
       dependency reads it back from the current request.
Who:   Injected into route handlers via FastAPI's Depends() system.

Why app.state (not a module-level singleton):
    Each app built by create_app() owns its own store. Tests create a fresh
    app per test and never see users created by another test.

Example usage in a route:
    @router.get("/users")
    async def list_users(store: UserStore = Depends(get_user_store)):
        return store.list_all()
"""

from fastapi import Request

from users_api.services.user_store import UserStore


def get_user_store(request: Request) -> UserStore:
    """Return the UserStore owned by the app serving this request."""
    return request.app.state.user_store
