"""Wire payloads for the layer that sits in front of the ledger core.

Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator
from pydantic.alias_generators import to_camel

from splitledger.models import Balance, SettlementRecord, SettlementStatus, Share, Transfer
from splitledger.services.split import CustomSplit, EqualSplit, SplitRequest


class Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class ShareIn(Payload):
    participant: str = Field(min_length=1)
    share_cents: int = Field(ge=0)


class EqualSplitIn(Payload):
    split_type: Literal["EQUAL"]
    amount_cents: int = Field(gt=0)
    participant_ids: list[str] = Field(min_length=1)

    def to_request(self) -> EqualSplit:
        return EqualSplit(amount_cents=self.amount_cents, participant_ids=list(self.participant_ids))


class CustomSplitIn(Payload):
    split_type: Literal["CUSTOM"]
    amount_cents: Optional[int] = Field(None, gt=0)
    custom_splits: list[ShareIn] = Field(min_length=1)

    def to_request(self) -> CustomSplit:
        return CustomSplit(
            custom_shares=[Share(participant=s.participant, share_cents=s.share_cents) for s in self.custom_splits],
            amount_cents=self.amount_cents,
        )


SplitIn = Annotated[Union[EqualSplitIn, CustomSplitIn], Field(discriminator="split_type")]

split_adapter: TypeAdapter[Union[EqualSplitIn, CustomSplitIn]] = TypeAdapter(SplitIn)


def parse_split_request(data: Any) -> SplitRequest:
    """Validate a raw EQUAL/CUSTOM payload and turn it into a core split request.

    Raises ``pydantic.ValidationError`` when the payload is malformed.
    """
    return split_adapter.validate_python(data).to_request()


class SettlementIn(Payload):
    from_participant: str = Field(alias="from", min_length=1)
    to_participant: str = Field(alias="to", min_length=1)
    amount_cents: int = Field(gt=0)
    status: SettlementStatus = SettlementStatus.PENDING

    @model_validator(mode="after")
    def _distinct_parties(self) -> "SettlementIn":
        if self.from_participant == self.to_participant:
            raise ValueError("A settlement needs two different participants")
        return self

    def to_record(self) -> SettlementRecord:
        return SettlementRecord(
            from_participant=self.from_participant,
            to_participant=self.to_participant,
            amount_cents=self.amount_cents,
            status=self.status,
        )


class BalanceOut(Payload):
    participant: str
    net_cents: int
    display_name: Optional[str] = None

    @classmethod
    def from_balance(cls, balance: Balance, display_name: Optional[str] = None) -> "BalanceOut":
        return cls(participant=balance.participant, net_cents=balance.net_cents, display_name=display_name)


class BalancesResponse(Payload):
    balances: list[BalanceOut]
    is_balanced: bool


class TransferOut(Payload):
    from_participant: str = Field(alias="from")
    to_participant: str = Field(alias="to")
    amount_cents: int

    @classmethod
    def from_transfer(cls, transfer: Transfer) -> "TransferOut":
        return cls(
            from_participant=transfer.from_participant,
            to_participant=transfer.to_participant,
            amount_cents=transfer.amount_cents,
        )


class SettlementPlanResponse(Payload):
    transfers: list[TransferOut]
    summary: str
    is_valid: bool
