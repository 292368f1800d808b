"""Zero-sum and total checks shared by the split, balance and settlement code.

All functions here are pure predicates. ``check_invariant`` is the one place
where a failed check turns into a critical log line (and, in strict mode, an
exception).
"""

from __future__ import annotations

from typing import Any, Iterable

from splitledger.errors import InvariantViolationError
from splitledger.logging import get_logger
from splitledger.models import Balance, Share, Transfer


def verify_split_total(shares: Iterable[Share], expected_total: int) -> bool:
    return sum(share.share_cents for share in shares) == expected_total


def verify_balances_sum(balances: Iterable[Balance]) -> bool:
    return sum(balance.net_cents for balance in balances) == 0


def apply_transfers(balances: Iterable[Balance], transfers: Iterable[Transfer]) -> dict[str, int]:
    """Return the balances that remain after every transfer has been paid.

    The payer's balance goes up by the amount, the receiver's goes down.
    Identifiers that only appear in transfers start from zero.
    """
    simulated: dict[str, int] = {}
    for balance in balances:
        simulated[balance.participant] = simulated.get(balance.participant, 0) + balance.net_cents

    for transfer in transfers:
        simulated[transfer.from_participant] = simulated.get(transfer.from_participant, 0) + transfer.amount_cents
        simulated[transfer.to_participant] = simulated.get(transfer.to_participant, 0) - transfer.amount_cents

    return simulated


def verify_settlements(balances: Iterable[Balance], transfers: Iterable[Transfer]) -> bool:
    return all(value == 0 for value in apply_transfers(balances, transfers).values())


def check_invariant(ok: bool, check: str, *, strict: bool = False, **context: Any) -> bool:
    if not ok:
        get_logger(__name__).critical("ledger.invariant_violated", check=check, **context)
        if strict:
            raise InvariantViolationError(check)
    return ok
