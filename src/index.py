## Main Execution Script
from controllers import create_app
from tools.logger import *
from tools.settings import LOG_LEVELS, ProxySettings
import argparse


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Docker PTY Proxy")
    parser.add_argument(
        "-l",
        "--log-level",
        choices=LOG_LEVELS,
        default=None,
        help="Set the logging level (use -l or --log-level)",
    )
    parser.add_argument("--host", default=None, help="Address to listen on")
    parser.add_argument("--port", type=int, default=None, help="Port to listen on")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    settings = ProxySettings.from_env().with_overrides(
        log_level=args.log_level,
        host=args.host,
        port=args.port,
    )
    set_log_level(settings.log_level)

    app = create_app(settings)

    log_info(f"docker-pty-proxy listening on {settings.host}:{settings.port}")
    try:
        app.run(host=settings.host, port=settings.port, use_reloader=False)
    except KeyboardInterrupt:
        log_warning("Keyboard interrupt received, shutting down.")
    log_info("Server stopped")


if __name__ == "__main__":
    main()
