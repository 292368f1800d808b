from __future__ import annotations

from typing import Iterable, Sequence

from splitledger.errors import UnknownParticipantError
from splitledger.logging import get_logger
from splitledger.models import Balance, ExpenseRecord, SettlementRecord, SettlementStatus


def compute_balances(
    expenses: Iterable[ExpenseRecord],
    settlements: Iterable[SettlementRecord],
    members: Sequence[str],
    *,
    strict: bool = False,
) -> list[Balance]:
    """Fold expenses and completed settlements into one net figure per member.

    Positive means the member is owed money, negative means they owe.
    Pending settlements are skipped. Identifiers outside ``members`` are
    started at zero and reported after the members unless ``strict`` is set,
    in which case they raise ``UnknownParticipantError``.

    The result is ordered by absolute balance, largest first; ties keep
    member order.
    """
    log = get_logger(__name__)
    totals: dict[str, int] = {member: 0 for member in members}

    def adjust(participant: str, delta: int) -> None:
        if participant not in totals:
            if strict:
                raise UnknownParticipantError(participant)
            log.warning("balances.unknown_participant", participant=participant)
            totals[participant] = 0
        totals[participant] += delta

    for expense in expenses:
        adjust(expense.payer, expense.amount_cents)
        for share in expense.shares:
            adjust(share.participant, -share.share_cents)

    for settlement in settlements:
        if settlement.status != SettlementStatus.COMPLETED:
            continue
        adjust(settlement.from_participant, settlement.amount_cents)
        adjust(settlement.to_participant, -settlement.amount_cents)

    balances = [Balance(participant=participant, net_cents=net) for participant, net in totals.items()]
    balances.sort(key=lambda b: abs(b.net_cents), reverse=True)
    return balances
