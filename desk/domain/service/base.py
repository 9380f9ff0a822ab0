"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold review desk rules that span several entities
    or coordinate repositories with the presence channel.
    """

    pass
