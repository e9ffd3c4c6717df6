"""
Users API - User Record Model
==============================

What:  The in-memory representation of one managed user.
How:   A frozen dataclass. The store never mutates a User; an update builds a
       new value with `dataclasses.replace` and swaps it in at the same key.
Who:   Created and owned by UserStore; read by routes via the response schema.

Why frozen:
    list_all() hands callers a list of the same User objects the store holds.
    Because those objects can never change, a snapshot taken before an update
    keeps showing the old values, and no caller can reach into the store by
    editing a record it was given.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    """
    One user record.

    Fields:
        id:    Store-assigned integer, unique and never reused
        name:  Non-empty display name
        email: Non-empty email address (not required to be unique)
    """

    id: int
    name: str
    email: str

    def __repr__(self) -> str:
        """Developer-friendly string representation for debugging."""
        return f"<User(id={self.id}, name='{self.name}', email='{self.email}')>"
