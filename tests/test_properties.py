"""Randomised checks of the ledger invariants over many seeded inputs."""

import random

import pytest

from splitledger.models import Balance, ExpenseRecord, SettlementRecord
from splitledger.services.balances import compute_balances
from splitledger.services.settlement import compute_settlements
from splitledger.services.split import compute_equal_split
from splitledger.services.verify import verify_balances_sum, verify_settlements, verify_split_total

SEEDS = range(50)


def random_members(rng: random.Random) -> list[str]:
    return [f"member-{i}" for i in rng.sample(range(100), rng.randint(1, 8))]


@pytest.mark.parametrize("seed", SEEDS)
def test_equal_split_properties(seed):
    rng = random.Random(seed)
    members = random_members(rng)
    amount = rng.randint(1, 1_000_000)

    shares = compute_equal_split(amount, members)
    shuffled = members[:]
    rng.shuffle(shuffled)

    assert verify_split_total(shares, amount)
    assert compute_equal_split(amount, shuffled) == shares
    values = [s.share_cents for s in shares]
    assert max(values) - min(values) <= 1


@pytest.mark.parametrize("seed", SEEDS)
def test_ledger_end_to_end(seed):
    rng = random.Random(seed)
    members = random_members(rng)

    expenses = []
    for _ in range(rng.randint(0, 20)):
        amount = rng.randint(1, 50_000)
        participants = rng.sample(members, rng.randint(1, len(members)))
        expenses.append(
            ExpenseRecord(
                amount_cents=amount,
                payer=rng.choice(members),
                shares=compute_equal_split(amount, participants),
            )
        )
    settlements = [
        SettlementRecord(
            from_participant=rng.choice(members),
            to_participant=rng.choice(members),
            amount_cents=rng.randint(1, 10_000),
        )
        for _ in range(rng.randint(0, 5))
    ]

    balances = compute_balances(expenses, settlements, members)
    assert verify_balances_sum(balances)
    assert len(balances) == len(members)

    transfers = compute_settlements(balances)
    assert all(t.amount_cents > 0 for t in transfers)
    assert verify_settlements(balances, transfers)

    nonzero = [b for b in balances if b.net_cents != 0]
    assert len(transfers) <= max(len(nonzero) - 1, 0)


@pytest.mark.parametrize("seed", SEEDS)
def test_settlement_plan_for_arbitrary_zero_sum_balances(seed):
    rng = random.Random(seed)
    values = [rng.randint(-10_000, 10_000) for _ in range(rng.randint(1, 12))]
    values.append(-sum(values))
    balances = [Balance(f"p{i}", v) for i, v in enumerate(values)]

    transfers = compute_settlements(balances)

    assert verify_settlements(balances, transfers)
    assert verify_settlements(balances, transfers)
    assert all(t.amount_cents > 0 for t in transfers)
