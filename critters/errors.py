"""
Exception types raised by the critters simulation.
"""


class CrittersError(Exception):
    """Base class for all simulation errors"""
    pass


class DataLoadError(CrittersError):
    """Raised when scene pack loading or validation fails"""
    pass


class UnknownSpeciesError(CrittersError, ValueError):
    """Raised when a species selector is outside the supported set"""
    pass


class SceneSwitchError(CrittersError):
    """Raised when a scene switch would interleave with a running tick"""
    pass


class ClockError(CrittersError):
    """Raised when the supplied clock reading goes backwards"""
    pass
