"""
Provider-agnostic domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``polychat.base.models_parts``.
"""

from .models_parts.content_part import ContentPart
from .models_parts.message import Message, Role, message_from_dict
from .models_parts.provider_metadata import ProviderMetadata
from .models_parts.sampling import SamplingParams
from .models_parts.model import Model
from .models_parts.raw_model_config import RawModelConfig, scale_price
from .models_parts.chat_request import ChatRequest
from .models_parts.chat_response import ChatResponse, TokenUsage

__all__ = [
    "ContentPart",
    "Message",
    "Role",
    "message_from_dict",
    "ProviderMetadata",
    "SamplingParams",
    "Model",
    "RawModelConfig",
    "scale_price",
    "ChatRequest",
    "ChatResponse",
    "TokenUsage",
]
