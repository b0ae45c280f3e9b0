"""Discovery module."""

from .receptionist import IReceptionist, Receptionist, build_invocation_request

__all__ = ["IReceptionist", "Receptionist", "build_invocation_request"]
