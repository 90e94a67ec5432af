from decimal import Decimal

import pytest

from conftest import make_booking
from roomhub.scheduling import (
    BookingStatus,
    CancelReasonRequired,
    InvalidDuration,
    SlotTaken,
    TransitionNotAllowed,
    can_transition,
    group_conflicts,
    price,
    resolve_conflict_group,
    transition,
)
from roomhub.scheduling.lifecycle import DEFAULT_CANCEL_REASON


def test_price_and_commission():
    quote = price(80, "09:00", "11:30")
    assert quote.total_amount == Decimal("200.00")
    assert quote.commission == Decimal("20.00")
    assert quote.duration_hours == Decimal("2.5")


def test_price_rounds_to_cents():
    quote = price(Decimal("33.33"), "09:00", "09:20")
    assert quote.total_amount == Decimal("11.11")
    assert quote.commission == Decimal("1.11")


def test_price_rejects_empty_duration():
    with pytest.raises(InvalidDuration):
        price(80, "10:00", "10:00")


@pytest.mark.parametrize(
    "current, target, allowed",
    [
        ("PENDING", "CONFIRMED", True),
        ("PENDING", "CANCELLED", True),
        ("CONFIRMED", "COMPLETED", True),
        ("CONFIRMED", "NO_SHOW", True),
        ("CONFIRMED", "PENDING", False),
        ("CANCELLED", "CONFIRMED", False),
        ("COMPLETED", "CANCELLED", False),
        ("NO_SHOW", "PENDING", False),
        ("CANCELLED", "CANCELLED", True),
    ],
)
def test_transition_table(current, target, allowed):
    assert can_transition(current, target) is allowed


def test_cancelled_is_terminal():
    booking = make_booking("09:00", "10:00", status="CANCELLED")
    with pytest.raises(TransitionNotAllowed) as excinfo:
        transition(booking, BookingStatus.CONFIRMED)
    assert excinfo.value.booking_id == booking.id
    assert booking.status == "CANCELLED"


def test_cancel_sets_default_reason():
    booking = make_booking("09:00", "10:00")
    transition(booking, BookingStatus.CANCELLED)
    assert booking.status == "CANCELLED"
    assert booking.cancel_reason == DEFAULT_CANCEL_REASON


def test_cancelling_confirmed_booking_needs_a_reason():
    booking = make_booking("09:00", "10:00", status="CONFIRMED")
    with pytest.raises(CancelReasonRequired):
        transition(booking, BookingStatus.CANCELLED, cancel_reason="  ")
    assert booking.status == "CONFIRMED"

    transition(booking, BookingStatus.CANCELLED, cancel_reason="Room flooded")
    assert (booking.status, booking.cancel_reason) == ("CANCELLED", "Room flooded")


def test_confirm_blocked_by_confirmed_overlap():
    confirmed = make_booking("09:00", "10:00", status="CONFIRMED")
    pending = make_booking("09:30", "10:30")
    with pytest.raises(SlotTaken) as excinfo:
        transition(pending, BookingStatus.CONFIRMED, others=[confirmed, pending])
    assert excinfo.value.booking_id == confirmed.id
    assert pending.status == "PENDING"


def test_confirm_allowed_over_pending_overlap():
    other = make_booking("09:00", "10:00")
    pending = make_booking("09:30", "10:30")
    transition(pending, BookingStatus.CONFIRMED, others=[other, pending])
    assert pending.status == "CONFIRMED"


def test_at_most_one_overlapping_booking_confirmed():
    a = make_booking("09:00", "10:00")
    b = make_booking("09:30", "10:30")
    transition(a, BookingStatus.CONFIRMED, others=[a, b])
    with pytest.raises(SlotTaken):
        transition(b, BookingStatus.CONFIRMED, others=[a, b])
    assert [a.status, b.status] == ["CONFIRMED", "PENDING"]


def test_resolve_confirms_winner_and_cancels_the_rest():
    a = make_booking("09:00", "11:00")
    b = make_booking("10:00", "12:00")
    c = make_booking("11:30", "13:00")
    (group,) = group_conflicts([a, b, c])

    winner, losers = resolve_conflict_group(group, b.id, others=[a, b, c], cancel_reason="Double booked")

    assert winner is b
    assert b.status == "CONFIRMED"
    assert {x.id for x in losers} == {a.id, c.id}
    assert all(x.status == "CANCELLED" and x.cancel_reason == "Double booked" for x in losers)


def test_resolve_with_unknown_winner_changes_nothing():
    a = make_booking("09:00", "10:00")
    b = make_booking("09:30", "10:30")
    (group,) = group_conflicts([a, b])

    with pytest.raises(ValueError):
        resolve_conflict_group(group, "not-a-member")
    assert [a.status, b.status] == ["PENDING", "PENDING"]


def test_resolve_blocked_by_confirmed_booking_outside_group_changes_nothing():
    a = make_booking("09:00", "10:00")
    b = make_booking("09:30", "10:30")
    (group,) = group_conflicts([a, b])
    # A confirmed booking the caller knows about but that was not grouped
    outsider = make_booking("09:00", "09:45", status="CONFIRMED")

    with pytest.raises(SlotTaken):
        resolve_conflict_group(group, a.id, others=[outsider])
    assert [a.status, b.status] == ["PENDING", "PENDING"]


def test_resolve_cancels_confirmed_loser_with_default_reason():
    a = make_booking("09:00", "10:00", status="CONFIRMED")
    b = make_booking("09:30", "10:30")
    (group,) = group_conflicts([a, b])

    resolve_conflict_group(group, b.id, others=[a, b])
    assert (a.status, a.cancel_reason) == ("CANCELLED", DEFAULT_CANCEL_REASON)
    assert b.status == "CONFIRMED"
