import re

from tools.errors import ValidationError

## Docker accepts names and ids of this shape, optionally prefixed by "/"
CONTAINER_ID_PATTERN = re.compile(r"/?[a-zA-Z0-9][a-zA-Z0-9_.-]*")

## ASCII decimal digits only, str.isdigit() also accepts "²" and "١٢٠"
DIGITS_PATTERN = re.compile(r"[0-9]+")

## Dimensions travel as uint32 on the Docker API
MAX_DIMENSION = 2**32 - 1


class BaseType:

    def __init__(self):
        raise Exception("Cannot instantiate")

    @staticmethod
    def validate(value):
        raise NotImplementedError("Subclasses should implement this!")


class StringType(BaseType):

    @staticmethod
    def validate(value):
        if not isinstance(value, str):
            raise TypeError("Value must be a string.")
        return value


class ContainerIdType(BaseType):

    @staticmethod
    def validate(value):
        if not isinstance(value, str) or not CONTAINER_ID_PATTERN.fullmatch(value):
            raise TypeError("Value must be a container name or id.")
        return value


class PositiveIntType(BaseType):
    """A JSON integer in 1..MAX_DIMENSION. Booleans and floats are rejected."""

    @staticmethod
    def validate(value):
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError("Value must be an integer.")
        if not 0 < value <= MAX_DIMENSION:
            raise TypeError("Value must be a positive integer.")
        return value


class PositiveIntParamType(BaseType):
    """A query-string integer in 1..MAX_DIMENSION, decimal digits only."""

    @staticmethod
    def validate(value):
        if not isinstance(value, str) or not DIGITS_PATTERN.fullmatch(value):
            raise TypeError("Value must be a positive integer.")
        try:
            number = int(value)
        except ValueError as e:
            raise TypeError("Value must be a positive integer.") from e
        return PositiveIntType.validate(number)


class OptionalType(BaseType):

    def __init__(self, item_type):
        self.item_type = item_type

    def validate(self, value):
        if value is not None:
            return self.item_type.validate(value)
        return None


RESIZE_FRAME = {
    "type": StringType,
    "cols": PositiveIntType,
    "rows": PositiveIntType,
}

ATTACH_QUERY = {
    "id": ContainerIdType,
}

RESIZE_QUERY = {
    "id": ContainerIdType,
    "w": PositiveIntParamType,
    "h": PositiveIntParamType,
}

## Query parameters are reported with the dimension they carry
PARAM_LABELS = {
    "w": '"w" (cols)',
    "h": '"h" (rows)',
}


def validate_contract(contract, data):
    """
    Validate `data` against `contract` and return the parsed values.

    Empty strings count as missing, matching how query strings are read.
    Keys not named by the contract are ignored.

    Raises:
        ValidationError: naming the first missing or invalid field
    """
    parsed = {}
    for key, value_type in contract.items():
        value = data.get(key) if hasattr(data, "get") else None
        if value is None or value == "":
            if isinstance(value_type, OptionalType):
                parsed[key] = None
                continue
            raise ValidationError(key, f'missing "{key}" parameter')
        try:
            parsed[key] = value_type.validate(value)
        except TypeError as e:
            label = PARAM_LABELS.get(key, f'"{key}"')
            raise ValidationError(key, f"invalid {label} parameter: {e}") from e
    return parsed
