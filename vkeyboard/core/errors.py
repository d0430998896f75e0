"""Exceptions raised by the keyboard core."""


class KeyboardConfigurationError(ValueError):
    """A colour, additional key set or settings file was rejected."""


class KeyboardStateError(RuntimeError):
    """The rendered layout does not hold a key the caller relies on."""
