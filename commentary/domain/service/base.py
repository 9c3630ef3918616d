"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the comment workflow rules that span several
    entities or repositories.
    """

    pass
