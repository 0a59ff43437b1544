"""
Exceptions raised inside the game core.
"""


class InvalidConfigurationError(ValueError):
    """Settings or roster that cannot start a round."""


class ContentGenerationError(RuntimeError):
    """The round generator returned nothing usable."""
