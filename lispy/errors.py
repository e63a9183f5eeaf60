class LispyError(Exception):
    """ Base class for all host-level Lispy errors"""
    pass

class LispySyntaxError(LispyError):
    """ Raised when the reader cannot parse its input"""

    def __init__(self, message: str, position: int | None = None):
        super().__init__(message if position is None else f"{message} at position {position}")
        self.position = position

class LispyConfigError(LispyError):
    """ Raised when a configuration value cannot be interpreted"""

# Language-level failures (unbound symbols, bad arguments, ...) are never raised:
# they are Error values, see lispy.types.error_value.
