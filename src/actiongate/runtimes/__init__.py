"""Container runtimes."""

from actiongate.runtimes.docker import DockerRuntime

__all__ = ["DockerRuntime"]
