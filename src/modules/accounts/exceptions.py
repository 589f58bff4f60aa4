"""Account domain exceptions."""

from __future__ import annotations


class UserAlreadyExists(Exception):
    """Username or e-mail is already registered."""


class UserNotFound(Exception):
    """The requested user does not exist."""


class CannotDeleteAdmin(Exception):
    """Admin accounts cannot be deleted from the back-office."""


class InvalidCredentials(Exception):
    """Login identifier and password do not match an active account."""
