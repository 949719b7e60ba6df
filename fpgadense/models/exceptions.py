class InvalidConfigurationError(Exception):
    """Exception raised when a layer or network configuration is invalid."""

class DimensionMismatchError(Exception):
    """Exception raised when evaluation operands have the wrong shape."""

class DataTypeMismatchError(Exception):
    """Exception raised when fixed-point operands have different data types."""

class FixedPointRangeError(Exception):
    """Exception raised when raw operands do not fit their declared width."""

class LayerNotImplementedError(Exception):
    """Exception raised when a layer is not implemented."""

class ModuleNotImplementedError(Exception):
    """Exception raised when a module is not implemented."""
