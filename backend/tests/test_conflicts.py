from conftest import MONDAY, make_booking
from roomhub.scheduling import (
    CONFIRM_BLOCKING,
    conflicted_ids,
    find_conflict,
    group_conflicts,
    intervals_overlap,
)


def test_touching_intervals_do_not_overlap():
    assert not intervals_overlap(540, 600, 600, 660)
    assert intervals_overlap(540, 601, 600, 660)


def test_touching_bookings_never_conflict():
    a = make_booking("09:00", "10:00")
    b = make_booking("10:00", "11:00")
    assert find_conflict([a], "room-1", MONDAY, "10:00", "11:00") is None
    assert find_conflict([b], "room-1", MONDAY, "09:00", "10:00") is None


def test_pending_booking_blocks_creation():
    existing = make_booking("09:00", "11:00")
    assert find_conflict([existing], "room-1", MONDAY, "10:00", "12:00") is existing


def test_cancelled_booking_never_blocks():
    cancelled = make_booking("09:00", "10:00", status="CANCELLED")
    assert find_conflict([cancelled], "room-1", MONDAY, "09:00", "10:00") is None


def test_other_room_or_day_is_ignored():
    elsewhere = make_booking("09:00", "10:00", room_id="room-2")
    assert find_conflict([elsewhere], "room-1", MONDAY, "09:00", "10:00") is None


def test_exclude_id_skips_the_booking_itself():
    booking = make_booking("09:00", "10:00", status="CONFIRMED")
    assert find_conflict([booking], "room-1", MONDAY, "09:00", "10:00", exclude_id=booking.id) is None


def test_confirm_blocking_ignores_pending():
    pending = make_booking("09:00", "10:00")
    confirmed = make_booking("09:30", "10:30", status="CONFIRMED")
    assert find_conflict([pending], "room-1", MONDAY, "09:00", "10:00", blocking_statuses=CONFIRM_BLOCKING) is None
    assert (
        find_conflict([pending, confirmed], "room-1", MONDAY, "09:00", "10:00", blocking_statuses=CONFIRM_BLOCKING)
        is confirmed
    )


def test_chained_overlaps_form_one_group():
    a = make_booking("09:00", "11:00")
    b = make_booking("10:00", "12:00")
    d = make_booking("11:30", "13:00")
    lonely = make_booking("14:00", "15:00")

    groups = group_conflicts([d, lonely, b, a])

    assert len(groups) == 1
    assert groups[0].booking_ids == [a.id, b.id, d.id]
    assert (groups[0].start_time, groups[0].end_time) == ("09:00", "13:00")
    assert conflicted_ids(groups) == {a.id, b.id, d.id}


def test_groups_are_split_per_room_and_day():
    first = [make_booking("09:00", "10:00"), make_booking("09:30", "10:30")]
    second = [make_booking("09:00", "10:00", room_id="room-2"), make_booking("09:00", "10:00", room_id="room-2")]

    groups = group_conflicts(first + second)

    assert sorted(len(g) for g in groups) == [2, 2]
    assert {g.room_id for g in groups} == {"room-1", "room-2"}


def test_terminal_bookings_do_not_join_groups():
    a = make_booking("09:00", "10:00")
    b = make_booking("09:00", "10:00", status="CANCELLED")
    c = make_booking("09:30", "10:30", status="COMPLETED")
    assert group_conflicts([a, b, c]) == []


def test_touching_bookings_stay_in_separate_components():
    assert group_conflicts([make_booking("09:00", "10:00"), make_booking("10:00", "11:00")]) == []
