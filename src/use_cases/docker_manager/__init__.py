"""
Docker Manager Use Case

Container-level operations that do not need a terminal session.
"""

from use_cases.docker_manager.resize_container import resize_container
from use_cases.docker_manager.get_runtime_status import get_runtime_status

__all__ = ["resize_container", "get_runtime_status"]
