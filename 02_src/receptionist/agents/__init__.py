"""Built-in agents."""

from .echo_agent import EchoAgent, default_descriptors

__all__ = ["EchoAgent", "default_descriptors"]
