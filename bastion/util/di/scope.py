"""Custom Dishka scopes for Bastion."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """Bastion dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Application lifetime (configuration, catalog, hierarchy, stores)
    - UOW: Unit of Work, one per HTTP request; permissions are resolved here
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
