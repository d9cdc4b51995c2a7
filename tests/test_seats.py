from urllib.parse import unquote

import pytest

from yunying.seats import (
    PARTIAL_MESSAGE,
    CandidateTrain,
    Passenger,
    SeatPriority,
    analyse,
    build_submit_strings,
    candidate_trains,
    select_seats,
)
from yunying.seattypes import seat_type_indices
from yunying.trains import SelectionContext, TrainRecord

SECOND = 10
FIRST = 11


def counts_with(**values):
    counts = [0] * 14
    for key, value in values.items():
        counts[{"second": SECOND, "first": FIRST, "hard": 9}[key]] = value
    return counts


def test_sufficient_takes_most_plentiful_type():
    counts = counts_with(second=5, first=100)
    assert select_seats(counts, [SECOND, FIRST], 2, SeatPriority.SUFFICIENT) == [(FIRST, 2)]


def test_sufficient_tops_up_from_other_types():
    counts = counts_with(second=1, first=2)
    result = select_seats(counts, [SECOND, FIRST], 3, SeatPriority.SUFFICIENT)
    assert result == [(FIRST, 2), (SECOND, 1)]


def test_select_does_not_mutate_counts():
    counts = counts_with(second=1, first=2)
    before = list(counts)
    select_seats(counts, [SECOND, FIRST], 3, SeatPriority.SUFFICIENT)
    assert counts == before


def test_strict_follows_selection_order():
    counts = counts_with(second=1, first=5)
    assert select_seats(counts, [SECOND, FIRST], 3, SeatPriority.STRICT) == [(SECOND, 1), (FIRST, 2)]


def test_partial_message_logged_when_short():
    messages = []
    counts = counts_with(second=1)
    result = select_seats(counts, [SECOND, FIRST], 3, SeatPriority.STRICT, messages.append)
    assert result == [(SECOND, 1)]
    assert PARTIAL_MESSAGE in messages


def test_price_low_when_sufficient_picks_cheapest_plenty():
    counts = counts_with(second=100, first=100)
    result = select_seats(counts, [FIRST, SECOND], 2, SeatPriority.PRICE_LOW_WHEN_SUFFICIENT)
    assert result == [(SECOND, 2)]


def test_price_low_when_sufficient_falls_back():
    counts = counts_with(second=1, first=3)
    fallback = select_seats(counts, [SECOND, FIRST], 2, SeatPriority.SUFFICIENT)
    result = select_seats(counts, [SECOND, FIRST], 2, SeatPriority.PRICE_LOW_WHEN_SUFFICIENT)
    assert result == fallback


def test_price_low_and_high_orders():
    counts = counts_with(second=3, first=3)
    low = select_seats(counts, [FIRST, SECOND], 4, SeatPriority.PRICE_LOW)
    high = select_seats(counts, [SECOND, FIRST], 4, SeatPriority.PRICE_HIGH)
    assert low == [(SECOND, 3), (FIRST, 1)]
    assert high == [(FIRST, 3), (SECOND, 1)]


@pytest.mark.parametrize("priority", list(SeatPriority))
def test_allocation_never_exceeds_passengers(priority):
    counts = counts_with(second=2, first=7, hard=100)
    selected = seat_type_indices(["硬座", "二等座", "一等座"])
    result = select_seats(counts, selected, 4, priority)
    assert sum(count for _, count in result) <= 4
    assert all(index in selected for index, _ in result)


def make_passenger(name, pass_type="1"):
    return Passenger(name=name, pass_type=pass_type, id_type_code="1", id_no="ID0001")


def test_build_submit_fields():
    ticket, old, seat_types = build_submit_strings(
        [(SECOND, 1)], [make_passenger("张三")], ["张三"], True, False
    )
    fields = ticket.split("%2C")
    assert fields[0] == "O"
    assert unquote(fields[3]) == "张三"
    assert fields[5] == "ID0001"
    assert seat_types == [("张三", "O")]
    assert old.endswith("_")
    assert unquote(old.split("%2C")[0]) == "张三"


def test_build_no_seat_code_depends_on_second_class():
    no_seat = seat_type_indices(["无座"])[0]
    _, _, with_second = build_submit_strings([(no_seat, 1)], [make_passenger("a")], ["a"], True, False)
    _, _, without = build_submit_strings([(no_seat, 1)], [make_passenger("a")], ["a"], False, False)
    assert with_second == [("a", "O")]
    assert without == [("a", "1")]


def test_build_joins_passengers_and_skips_unknown():
    passengers = [make_passenger("a"), make_passenger("b")]
    ticket, old, seat_types = build_submit_strings([(FIRST, 3)], passengers, ["a", "x", "b"], True, False)
    assert [name for name, _ in seat_types] == ["a", "b"]
    assert len(ticket.split("_")) == 2
    assert not ticket.endswith("_")
    assert old.count("_") == 2


def test_build_skips_unsupported_seat_type():
    ticket, old, seat_types = build_submit_strings([(2, 1)], [make_passenger("a")], ["a"], True, False)
    assert (ticket, old, seat_types) == ("", "", [])


def test_build_student_type_kept_only_for_students():
    student = make_passenger("s", pass_type="3")
    ticket_student, _, _ = build_submit_strings([(FIRST, 1)], [student], ["s"], True, True)
    ticket_adult, _, _ = build_submit_strings([(FIRST, 1)], [student], ["s"], True, False)
    assert ticket_student.split("%2C")[2] == "3"
    assert ticket_adult.split("%2C")[2] != "3"


STATIONS = {"AAA": "甲", "BBB": "乙"}


def make_train(code="G1", seats=None, secret="secret", flag="1", limit=""):
    return TrainRecord(
        code=code,
        from_code="AAA",
        to_code="BBB",
        seats=seats or {},
        secret=secret,
        candidate_flag=flag,
        candidate_seat_limit=limit,
        spend_time="01:00",
    )


def make_context(selected, seat_types=("二等座",), passengers=1):
    return SelectionContext(
        seat_types=list(seat_types),
        passenger_count=passengers,
        selected_trains=selected,
        station_names=STATIONS,
    )


def test_candidate_for_sold_out_seat():
    context = make_context(["G1 (甲 乙"])
    result = candidate_trains([make_train(seats={SECOND: "无"})], context, ["二等座"], False)
    assert result == [CandidateTrain("G1", "secret", ["O"])]


def test_candidate_respects_seat_limit_and_force():
    context = make_context(["G1 (甲 乙"])
    limited = candidate_trains([make_train(seats={SECOND: "无"}, limit="O")], context, ["二等座"], False)
    assert limited[0].seat_types == []
    plenty = make_train(seats={SECOND: "有"})
    assert candidate_trains([plenty], context, ["二等座"], False)[0].seat_types == []
    assert candidate_trains([plenty], context, ["二等座"], True)[0].seat_types == ["O"]


def test_candidate_excludes_unselected_and_secretless():
    context = make_context(["G1 (甲 乙"])
    trains = [make_train(code="G2", seats={SECOND: "无"}), make_train(seats={SECOND: "无"}, secret="")]
    assert candidate_trains(trains, context, ["二等座"], False) == []


def test_analyse_books_available_train():
    messages = []
    context = make_context(["G1 (甲 乙"])
    result = analyse(
        [make_train(seats={SECOND: "有"})], context, [make_passenger("a")], SeatPriority.STRICT, False, messages.append
    )
    assert result is not None
    index, ticket, _old, seat_types = result
    assert index == 0
    assert seat_types == [("a", "O")]
    assert ticket.startswith("O%2C")
    assert "正在生成提交信息..." in messages


def test_analyse_returns_none_without_tickets():
    context = make_context(["G1 (甲 乙"])
    result = analyse([make_train(seats={SECOND: "无"})], context, [make_passenger("a")], SeatPriority.STRICT, False)
    assert result is None