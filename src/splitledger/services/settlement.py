from __future__ import annotations

from typing import Iterable, List, Mapping, Optional

from splitledger.models import Balance, Transfer
from splitledger.utils.money import format_dollars

SETTLED_MESSAGE = "Everyone is settled up! No payments needed."


def compute_settlements(balances: Iterable[Balance]) -> List[Transfer]:
    """Greedy plan: repeatedly pay the largest creditor from the largest debtor.

    Produces at most ``creditors + debtors - 1`` transfers. This is optimal
    for the usual two- and three-person cases but not guaranteed minimal in
    general.
    """
    creditors: list[tuple[str, int]] = []
    debtors: list[tuple[str, int]] = []

    for balance in balances:
        if balance.net_cents > 0:
            creditors.append((balance.participant, balance.net_cents))
        elif balance.net_cents < 0:
            debtors.append((balance.participant, -balance.net_cents))

    creditors.sort(key=lambda x: x[1], reverse=True)
    debtors.sort(key=lambda x: x[1], reverse=True)

    transfers: list[Transfer] = []
    i, j = 0, 0

    while i < len(creditors) and j < len(debtors):
        cred_id, cred_amount = creditors[i]
        debt_id, debt_amount = debtors[j]

        transfer_amount = min(cred_amount, debt_amount)
        if transfer_amount > 0:
            transfers.append(
                Transfer(from_participant=debt_id, to_participant=cred_id, amount_cents=transfer_amount)
            )

        cred_amount -= transfer_amount
        debt_amount -= transfer_amount

        if cred_amount == 0:
            i += 1
        else:
            creditors[i] = (cred_id, cred_amount)

        if debt_amount == 0:
            j += 1
        else:
            debtors[j] = (debt_id, debt_amount)

    return transfers


def format_settlement_summary(
    transfers: Iterable[Transfer],
    names: Optional[Mapping[str, str]] = None,
    currency_symbol: str = "$",
) -> str:
    names = names or {}
    lines = [
        f"{names.get(t.from_participant, t.from_participant)} pays "
        f"{names.get(t.to_participant, t.to_participant)} {currency_symbol}{format_dollars(t.amount_cents)}"
        for t in transfers
    ]
    if not lines:
        return SETTLED_MESSAGE
    return "\n".join(lines)
