
class SexplugError(Exception):
    """ Base class for all sexplug errors"""
    pass

class SexplugInvalidSymbol(SexplugError):
    """ Raised when an atom or hole name is not a valid symbol"""
    pass

class SexplugSyntaxError(SexplugError):
    """ Raised when textual expression input is malformed"""

class SexplugTypeError(SexplugError):
    """ Raised when a value is not an expression or plan where one is required"""

class SexplugConfigError(SexplugError):
    """ Raised when a configuration value is not recognised"""
