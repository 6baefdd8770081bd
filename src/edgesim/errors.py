"""
Exception types raised by edgesim.

Parameter and shape problems subclass ValueError so existing
``except ValueError`` handlers keep catching them.
"""


class EdgesimError(Exception):
    """Base class for all edgesim errors."""


class InvalidParameterError(EdgesimError, ValueError):
    """A simulation, encoding or selection parameter is out of range."""


class DesignMatrixError(EdgesimError, ValueError):
    """Train and test design matrices cannot be aligned."""


class ModelFitError(EdgesimError, RuntimeError):
    """A model could not be fitted on the supplied data."""
