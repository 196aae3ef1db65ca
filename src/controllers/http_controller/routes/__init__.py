from functools import wraps
from tools.logger import *
from tools.contract_validation import validate_contract
from tools.errors import ValidationError


def route(name):
    """
    Decorator to register a route initializer.
    """

    def wrapper(init):
        log_info(f"Registering route: {name}")
        return init

    return wrapper


def validate_query(contract, name, source):
    """
    Decorator to validate query parameters against a contract schema.

    The handler is called with the parsed parameters. On a missing or
    invalid parameter a 400 response is returned instead, before any
    websocket upgrade or runtime call happens.

    Args:
        contract: The contract schema to validate against
        name: The route name (used in log messages)
        source: Quart `request` or `websocket` proxy to read the args from

    Returns:
        Decorator function
    """

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                params = validate_contract(contract, source.args)
            except ValidationError as e:
                log_warning(f"Rejected {name} request: {e.message}")
                return e.message, 400

            return await func(params, *args, **kwargs)

        return wrapper

    return decorator
