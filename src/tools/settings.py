"""
Process-wide configuration.

Built once at startup (environment, then CLI overrides) and handed by
reference to every route and session. Never mutated afterwards.
"""

import os
import shlex
from dataclasses import dataclass, replace
from typing import Mapping, Optional, Tuple

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ProxySettings:
    host: str = "0.0.0.0"
    port: int = 8080

    ## Exec session
    shell: Tuple[str, ...] = ("/bin/sh",)
    workdir: str = "/workspace"
    environment: Tuple[str, ...] = ("TERM=xterm",)

    ## Streaming
    read_buffer_size: int = 4096
    write_deadline: float = 10.0

    ## Health probe
    health_timeout: float = 3.0

    cors_origin: str = "*"
    log_level: str = "INFO"

    def __post_init__(self):
        if not 0 < self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}")
        if not self.shell:
            raise ValueError("Shell command cannot be empty")
        if self.read_buffer_size <= 0:
            raise ValueError(f"Invalid read buffer size: {self.read_buffer_size}")
        if self.write_deadline <= 0 or self.health_timeout <= 0:
            raise ValueError("Timeouts must be positive")
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {self.log_level}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ProxySettings":
        """
        Build settings from environment variables.

        Recognised variables: HOST, PORT, PTY_SHELL, PTY_WORKDIR, PTY_TERM,
        CORS_ALLOW_ORIGIN, LOG_LEVEL. Unset or empty variables keep the
        defaults.
        """
        env = os.environ if environ is None else environ
        overrides = {}

        if env.get("HOST"):
            overrides["host"] = env["HOST"]
        if env.get("PORT"):
            try:
                overrides["port"] = int(env["PORT"])
            except ValueError:
                raise ValueError(f"Invalid PORT: {env['PORT']!r}") from None
        if env.get("PTY_SHELL"):
            overrides["shell"] = tuple(shlex.split(env["PTY_SHELL"]))
        if env.get("PTY_WORKDIR"):
            overrides["workdir"] = env["PTY_WORKDIR"]
        if env.get("PTY_TERM"):
            overrides["environment"] = (f"TERM={env['PTY_TERM']}",)
        if env.get("CORS_ALLOW_ORIGIN"):
            overrides["cors_origin"] = env["CORS_ALLOW_ORIGIN"]
        if env.get("LOG_LEVEL"):
            overrides["log_level"] = env["LOG_LEVEL"].upper()

        return cls(**overrides)

    def with_overrides(self, **changes) -> "ProxySettings":
        """Return a copy with the non-None values in `changes` applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
