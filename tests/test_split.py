import pytest

from splitledger.errors import SplitErrorCode, SplitValidationError
from splitledger.models import Share
from splitledger.services.split import (
    CustomSplit,
    EqualSplit,
    calculate_split,
    compute_equal_split,
    process_custom_splits,
)
from splitledger.services.verify import verify_split_total


def test_equal_split_even():
    shares = compute_equal_split(1000, ["user1", "user2"])
    assert shares == [Share("user1", 500), Share("user2", 500)]


def test_equal_split_remainder_goes_to_first_sorted_id():
    shares = compute_equal_split(1000, ["user1", "user2", "user3"])
    assert [s.share_cents for s in shares] == [334, 333, 333]
    assert verify_split_total(shares, 1000)


def test_equal_split_two_remainder_cents():
    shares = compute_equal_split(1001, ["user1", "user2", "user3"])
    assert [(s.participant, s.share_cents) for s in shares] == [
        ("user1", 334),
        ("user2", 334),
        ("user3", 333),
    ]


def test_equal_split_ignores_input_order():
    assert compute_equal_split(1000, ["user3", "user1", "user2"]) == compute_equal_split(
        1000, ["user1", "user2", "user3"]
    )


def test_equal_split_single_participant():
    assert compute_equal_split(1000, ["user1"]) == [Share("user1", 1000)]


def test_equal_split_small_amount_many_people():
    shares = compute_equal_split(3, ["a", "b", "c", "d", "e"])
    assert sum(s.share_cents for s in shares) == 3
    assert [s.share_cents for s in shares] == [1, 1, 1, 0, 0]


@pytest.mark.parametrize(
    ("amount", "participants", "code"),
    [
        (1000, [], SplitErrorCode.NO_PARTICIPANTS),
        (0, ["user1"], SplitErrorCode.INVALID_AMOUNT),
        (-100, ["user1"], SplitErrorCode.INVALID_AMOUNT),
        (10.5, ["user1"], SplitErrorCode.INVALID_AMOUNT),
        (True, ["user1"], SplitErrorCode.INVALID_AMOUNT),
        (1000, ["user1", "user1"], SplitErrorCode.DUPLICATE_PARTICIPANT),
    ],
)
def test_equal_split_rejects_bad_input(amount, participants, code):
    with pytest.raises(SplitValidationError) as exc_info:
        compute_equal_split(amount, participants)
    assert exc_info.value.code is code


def test_custom_split_passes_through():
    shares = [Share("bob", 700), Share("alice", 300)]
    result = process_custom_splits(1000, shares)
    assert result == shares
    assert result is not shares


def test_custom_split_allows_zero_share():
    result = process_custom_splits(500, [Share("a", 500), Share("b", 0)])
    assert verify_split_total(result, 500)


@pytest.mark.parametrize(
    ("amount", "shares", "code"),
    [
        (1000, [], SplitErrorCode.NO_PARTICIPANTS),
        (1000, [Share("a", 600), Share("b", 300)], SplitErrorCode.TOTAL_MISMATCH),
        (1000, [Share("a", 1100), Share("b", -100)], SplitErrorCode.NEGATIVE_SHARE),
        (1000, [Share("a", 999.5), Share("b", 0.5)], SplitErrorCode.INVALID_SHARE),
        (1000, [Share("a", 500), Share("a", 500)], SplitErrorCode.DUPLICATE_PARTICIPANT),
        (0, [Share("a", 0)], SplitErrorCode.INVALID_AMOUNT),
    ],
)
def test_custom_split_rejects_bad_input(amount, shares, code):
    with pytest.raises(SplitValidationError) as exc_info:
        process_custom_splits(amount, shares)
    assert exc_info.value.code is code


def test_split_validation_error_is_value_error():
    with pytest.raises(ValueError, match="At least one participant is required"):
        compute_equal_split(1000, [])


def test_calculate_split_dispatches_equal():
    shares = calculate_split(EqualSplit(amount_cents=900, participant_ids=["c", "a", "b"]))
    assert [s.participant for s in shares] == ["a", "b", "c"]
    assert {s.share_cents for s in shares} == {300}


def test_calculate_split_derives_custom_total():
    shares = calculate_split(CustomSplit(custom_shares=[Share("a", 250), Share("b", 750)]))
    assert verify_split_total(shares, 1000)


def test_calculate_split_checks_explicit_custom_total():
    with pytest.raises(SplitValidationError) as exc_info:
        calculate_split(CustomSplit(custom_shares=[Share("a", 250)], amount_cents=300))
    assert exc_info.value.code is SplitErrorCode.TOTAL_MISMATCH


def test_calculate_split_rejects_unknown_request():
    with pytest.raises(TypeError):
        calculate_split(object())  # type: ignore[arg-type]


def test_verify_split_total():
    shares = [Share("user1", 500), Share("user2", 400)]
    assert verify_split_total(shares, 900)
    assert not verify_split_total(shares, 1000)
    assert verify_split_total([], 0)
    assert not verify_split_total([], 100)


@pytest.mark.parametrize("share_cents", ["500", None, 12.5])
def test_calculate_split_rejects_bad_share_before_deriving_total(share_cents):
    with pytest.raises(SplitValidationError) as exc_info:
        calculate_split(CustomSplit(custom_shares=[Share("a", 500), Share("b", share_cents)]))
    assert exc_info.value.code is SplitErrorCode.INVALID_SHARE
