"""Aggregate application use cases."""

from .users import authenticate_user, create_user, register_user

__all__ = [
    "authenticate_user",
    "create_user",
    "register_user",
]
