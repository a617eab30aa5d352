from .commands import (
    DecodedCommand,
    FormatCommandsRequest,
    FormatCommandsResponse,
    FormattedValue,
    FormatValueRequest,
    Parameter,
    RenderedCommand,
    RenderedParameter,
)
from .tokens import NetworkDescriptor, TokenMetadata

__all__ = [
    "DecodedCommand",
    "FormatCommandsRequest",
    "FormatCommandsResponse",
    "FormattedValue",
    "FormatValueRequest",
    "NetworkDescriptor",
    "Parameter",
    "RenderedCommand",
    "RenderedParameter",
    "TokenMetadata",
]
