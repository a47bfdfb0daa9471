"""Pydantic models for the paste parser: output contract."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Network(BaseModel):
    """One supported chain in the network directory."""

    model_config = ConfigDict(frozen=True)

    value: str
    label: str
    chain_id: int
    eip3770_prefix: str
    logo: str = ""


class NetworkResolution(BaseModel):
    model_config = ConfigDict(frozen=True)

    chain_id: int | None = None
    network: str | None = None
    detected_short_name: str | None = None
    all_network_short_names: list[str] | None = None


class ParsedTransactionFields(BaseModel):
    """Fields recovered from one paste. ``None`` means "not found"."""

    model_config = ConfigDict(frozen=True)

    safe_address: str | None = None
    to: str | None = None
    value: str | None = None
    data: str | None = None
    operation: str | None = None
    safe_tx_gas: str | None = None
    base_gas: str | None = None
    gas_price: str | None = None
    gas_token: str | None = None
    refund_receiver: str | None = None
    nonce: str | None = None
    safe_tx_hash: str | None = None
    domain_hash: str | None = None
    message_hash: str | None = None

    network: str | None = None
    chain_id: int | None = None
    detected_short_name: str | None = None
    all_network_short_names: list[str] | None = None
    truncated_fields: set[str] = Field(default_factory=set)

    @property
    def is_truncated(self) -> bool:
        return bool(self.truncated_fields)

    def present_fields(self) -> list[str]:
        """Names of the fields that were found."""
        return [name for name, value in self if value is not None and name != "truncated_fields"]


class TransactionForm(BaseModel):
    """Destination form state the parsed fields are applied to."""

    method: str = "direct"
    network: str = ""
    chain_id: int = 0
    address: str = ""
    to: str = ""
    value: str = ""
    data: str = ""
    operation: str = ""
    safe_tx_gas: str = ""
    base_gas: str = ""
    gas_price: str = ""
    gas_token: str = ""
    refund_receiver: str = ""
    nonce: str = ""
    version: str = ""


class OutcomeKind(str, Enum):
    EMPTY_INPUT = "empty_input"
    NO_RECOGNIZED_FIELDS = "no_recognized_fields"
    TRUNCATED_CONTENT = "truncated_content"
    PARTIAL_FIELDS = "partial_fields"
    SUCCESS = "success"


class PasteOutcome(BaseModel):
    """Result of one paste attempt: exactly one error, warning or success."""

    kind: OutcomeKind
    severity: str
    message: str
    instructions: list[str] = Field(default_factory=list)
    fields: ParsedTransactionFields | None = None
    truncated_fields: list[str] = Field(default_factory=list)
    missing_fields: list[str] = Field(default_factory=list)
    network_unresolved: bool = False
    applied: bool = False


class ParseRequest(BaseModel):
    text: str
    method: str = "direct"
    version: str = ""


class ParseResponse(BaseModel):
    request_id: str
    trace_id: str
    outcome: PasteOutcome
    form: TransactionForm
