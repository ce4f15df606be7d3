"""Exceptions raised while configuring the compatibility engine."""


class ConfigurationError(ValueError):
    """Invalid rule or metadata configuration.

    Raised at setup time (building metadata, constructing rules), never while
    comparing values.
    """
