from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Union

from splitledger.errors import SplitErrorCode, SplitValidationError
from splitledger.models import Share, SplitType
from splitledger.services.verify import verify_split_total


@dataclass(frozen=True, slots=True)
class EqualSplit:
    amount_cents: int
    participant_ids: Sequence[str]
    split_type: SplitType = SplitType.EQUAL


@dataclass(frozen=True, slots=True)
class CustomSplit:
    custom_shares: Sequence[Share]
    amount_cents: Optional[int] = None
    split_type: SplitType = SplitType.CUSTOM


SplitRequest = Union[EqualSplit, CustomSplit]


def _is_whole_cents(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _require_positive_amount(amount_cents: object) -> None:
    if not _is_whole_cents(amount_cents) or amount_cents <= 0:  # type: ignore[operator]
        raise SplitValidationError(SplitErrorCode.INVALID_AMOUNT, "Amount must be a positive integer")


def _require_unique(participant_ids: Iterable[str]) -> None:
    seen: set[str] = set()
    for participant in participant_ids:
        if participant in seen:
            raise SplitValidationError(
                SplitErrorCode.DUPLICATE_PARTICIPANT,
                f"Participant {participant!r} appears more than once",
            )
        seen.add(participant)


def compute_equal_split(amount_cents: int, participant_ids: Sequence[str]) -> list[Share]:
    """Split ``amount_cents`` as evenly as possible.

    Identifiers are sorted lexicographically and the first ``amount % n`` of
    them get one extra cent. The result therefore depends only on the set of
    participants, never on the order the caller listed them in; audit
    snapshots and tests rely on that.
    """
    if not participant_ids:
        raise SplitValidationError(SplitErrorCode.NO_PARTICIPANTS, "At least one participant is required")
    _require_positive_amount(amount_cents)
    _require_unique(participant_ids)

    n = len(participant_ids)
    base_share, remainder = divmod(amount_cents, n)

    shares = [
        Share(participant=participant, share_cents=base_share + (1 if index < remainder else 0))
        for index, participant in enumerate(sorted(participant_ids))
    ]
    assert verify_split_total(shares, amount_cents)
    return shares


def process_custom_splits(amount_cents: int, custom_shares: Sequence[Share]) -> list[Share]:
    if not custom_shares:
        raise SplitValidationError(SplitErrorCode.NO_PARTICIPANTS, "At least one participant is required")

    _require_valid_shares(custom_shares)
    _require_unique(share.participant for share in custom_shares)
    _require_positive_amount(amount_cents)

    if not verify_split_total(custom_shares, amount_cents):
        total = sum(share.share_cents for share in custom_shares)
        raise SplitValidationError(
            SplitErrorCode.TOTAL_MISMATCH,
            f"Shares add up to {total} but the expense is {amount_cents}",
        )

    return [Share(participant=share.participant, share_cents=share.share_cents) for share in custom_shares]


def _require_valid_shares(custom_shares: Sequence[Share]) -> None:
    for share in custom_shares:
        if not _is_whole_cents(share.share_cents):
            raise SplitValidationError(
                SplitErrorCode.INVALID_SHARE,
                f"Share for {share.participant!r} must be a whole number of cents",
            )
        if share.share_cents < 0:
            raise SplitValidationError(
                SplitErrorCode.NEGATIVE_SHARE,
                f"Share for {share.participant!r} cannot be negative",
            )


def calculate_split(request: SplitRequest) -> list[Share]:
    if isinstance(request, EqualSplit):
        return compute_equal_split(request.amount_cents, request.participant_ids)

    if isinstance(request, CustomSplit):
        amount_cents = request.amount_cents
        if amount_cents is None:
            # total comes from the shares themselves
            _require_valid_shares(request.custom_shares)
            amount_cents = sum(share.share_cents for share in request.custom_shares)
        return process_custom_splits(amount_cents, request.custom_shares)

    raise TypeError(f"Unsupported split request: {type(request).__name__}")
