"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the user aggregate's behaviour; entities stay
    plain immutable data.
    """

    pass
