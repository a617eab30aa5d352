from .command_renderer import CommandRenderer, to_text
from .token_registry import RegistryState, TokenRegistry, get_token_registry, reset_token_registry
from .value_classifier import ClassifiedValue, ValueKind, classify
from .value_formatter import ValueFormatter, serialize_raw

__all__ = [
    "ClassifiedValue",
    "CommandRenderer",
    "RegistryState",
    "TokenRegistry",
    "ValueFormatter",
    "ValueKind",
    "classify",
    "get_token_registry",
    "reset_token_registry",
    "serialize_raw",
    "to_text",
]
