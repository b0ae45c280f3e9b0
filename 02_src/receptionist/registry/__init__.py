"""Registry module."""

from .card import build_agent_card
from .documents import decode_skill_document, encode_skill_document
from .registry import CapabilityRegistry, ICapabilityRegistry

__all__ = [
    "CapabilityRegistry",
    "ICapabilityRegistry",
    "build_agent_card",
    "decode_skill_document",
    "encode_skill_document",
]
