from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Parameter(BaseModel):
    name: str = Field(description="Parameter name as reported by the decoder")
    value: Any = Field(default=None, description="Decoded parameter value")


class DecodedCommand(BaseModel):
    """One router instruction as produced by the calldata decoder."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(
        validation_alias=AliasChoices("name", "commandName"),
        description="Command name, e.g. V3_SWAP_EXACT_IN",
    )
    kind: str = Field(
        default="",
        validation_alias=AliasChoices("kind", "commandType", "type"),
        description="Command type identifier",
    )
    parameters: List[Parameter] = Field(
        default_factory=list,
        validation_alias=AliasChoices("parameters", "params"),
        description="Ordered decoded parameters",
    )


class FormattedValue(BaseModel):
    display: str = Field(description="Human-readable rendering")
    raw: str = Field(description="JSON serialisation of the original value")


class RenderedParameter(BaseModel):
    name: str
    display: str
    raw: str


class RenderedCommand(BaseModel):
    index: int = Field(description="1-based position of the command in the transaction")
    name: str
    kind: str = ""
    parameters: List[RenderedParameter] = Field(default_factory=list)


class FormatValueRequest(BaseModel):
    value: Any = Field(default=None, description="Decoded value to render")
    network_id: Optional[str] = Field(default=None, description="Active network chain id")
    contextual_currency: Optional[str] = Field(
        default=None,
        description="Token address whose decimals scale a bare amount",
    )


class FormatCommandsRequest(BaseModel):
    commands: List[DecodedCommand] = Field(description="Decoder output for one transaction")
    network_id: Optional[str] = Field(default=None, description="Active network chain id")


class FormatCommandsResponse(BaseModel):
    commands: List[RenderedCommand] = Field(default_factory=list)
    network_id: Optional[str] = None
