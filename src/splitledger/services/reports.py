"""Balance and settlement views handed to the API layer.

These wrap the pure core with the bits a request handler needs: display
names, the verification flags, and critical logging when a check fails.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Optional, Protocol, Sequence

from splitledger.config import Settings, get_settings
from splitledger.logging import get_logger
from splitledger.models import Balance, ExpenseRecord, Member, SettlementRecord, Share
from splitledger.schemas import BalanceOut, BalancesResponse, SettlementPlanResponse, TransferOut
from splitledger.services.balances import compute_balances
from splitledger.services.settlement import compute_settlements, format_settlement_summary
from splitledger.services.split import SplitRequest, calculate_split
from splitledger.services.verify import check_invariant, verify_balances_sum, verify_settlements


class LedgerSource(Protocol):
    async def list_members(self, group_id: str) -> list[Member]: ...

    async def list_expenses(self, group_id: str) -> list[ExpenseRecord]: ...

    async def list_settlements(self, group_id: str) -> list[SettlementRecord]: ...


def expense_shares(request: SplitRequest) -> list[Share]:
    shares = calculate_split(request)
    get_logger(__name__).debug(
        "split.computed",
        split_type=request.split_type.value,
        participants=len(shares),
    )
    return shares


def balances_report(
    expenses: Iterable[ExpenseRecord],
    settlements: Iterable[SettlementRecord],
    members: Sequence[Member],
    *,
    group_id: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> tuple[list[Balance], BalancesResponse]:
    settings = settings or get_settings()
    balances = compute_balances(
        expenses,
        settlements,
        [member.id for member in members],
        strict=settings.strict_membership,
    )
    is_balanced = check_invariant(
        verify_balances_sum(balances),
        "balances_sum_to_zero",
        strict=settings.strict_invariants,
        group_id=group_id,
    )
    names = {member.id: member.display_name for member in members}
    response = BalancesResponse(
        balances=[BalanceOut.from_balance(b, names.get(b.participant)) for b in balances],
        is_balanced=is_balanced,
    )
    return balances, response


def settlement_report(
    balances: Sequence[Balance],
    names: Optional[Mapping[str, str]] = None,
    *,
    group_id: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> SettlementPlanResponse:
    settings = settings or get_settings()
    transfers = compute_settlements(balances)
    is_valid = check_invariant(
        verify_settlements(balances, transfers),
        "settlements_zero_all_balances",
        strict=settings.strict_invariants,
        group_id=group_id,
        transfers=len(transfers),
    )
    return SettlementPlanResponse(
        transfers=[TransferOut.from_transfer(t) for t in transfers],
        summary=format_settlement_summary(transfers, names, settings.currency_symbol),
        is_valid=is_valid,
    )


async def _load_balances(
    source: LedgerSource, group_id: str, settings: Optional[Settings]
) -> tuple[list[Member], list[Balance], BalancesResponse]:
    members = await source.list_members(group_id)
    expenses = await source.list_expenses(group_id)
    settlements = await source.list_settlements(group_id)
    get_logger(__name__).info(
        "ledger.loaded",
        group_id=group_id,
        members=len(members),
        expenses=len(expenses),
        settlements=len(settlements),
    )
    balances, response = balances_report(expenses, settlements, members, group_id=group_id, settings=settings)
    return members, balances, response


async def load_group_balances(
    source: LedgerSource, group_id: str, settings: Optional[Settings] = None
) -> BalancesResponse:
    _, _, response = await _load_balances(source, group_id, settings)
    return response


async def load_settlement_plan(
    source: LedgerSource, group_id: str, settings: Optional[Settings] = None
) -> SettlementPlanResponse:
    members, balances, _ = await _load_balances(source, group_id, settings)
    names = {member.id: member.label for member in members}
    return settlement_report(balances, names, group_id=group_id, settings=settings)
