class CellCommError(Exception):
    pass


class ConfigurationError(CellCommError):
    pass


class InvalidInputError(CellCommError):
    pass


class StorageConversionError(CellCommError):
    pass


class LengthMismatchError(CellCommError):
    pass


class EmptyInputError(CellCommError):
    pass


class DimensionMismatchError(CellCommError):
    pass


class ImmutableAttributeError(CellCommError, AttributeError):
    pass
