from .routes.attach import init as init_attach
from .routes.resize import init as init_resize
from .routes.healthz import init as init_healthz
from quart import request

from tools.logger import *


def initialize_all(app, runtime, settings):

    # Initialize all routes
    init_attach(app, runtime, settings)
    init_resize(app, runtime, settings)
    init_healthz(app, runtime, settings)


def enable_cors(app, settings):
    """
    Add the CORS headers browsers need to call the HTTP routes.

    Preflight requests are answered with an empty 204 before routing.
    """

    @app.before_request
    async def answer_preflight():
        if request.method == "OPTIONS":
            return "", 204

    @app.after_request
    async def add_cors_headers(response):
        response.headers["Access-Control-Allow-Origin"] = settings.cors_origin
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        return response


def init(app, runtime, settings):
    """
    Initialize the HTTP controller by registering routes and middleware.
    """
    log_info("Initializing HTTP Controller...")

    initialize_all(app, runtime, settings)
    enable_cors(app, settings)

    log_info("HTTP Controller initialized successfully.")
