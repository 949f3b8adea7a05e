"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold business rules that span an aggregate and its
    repositories, or that don't belong to any single entity.
    """

    pass
