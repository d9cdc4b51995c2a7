"""Choosing seat types for a train, building order submission strings and candidate orders."""

import enum
import logging
from dataclasses import dataclass, field
from typing import List
from urllib.parse import quote

from yunying.seattypes import (
    description_to_submit_code,
    seat_type_description,
    seat_type_indices,
    submit_code,
)
from yunying.trains import TrainPriority, select_train

PLENTY = 100
PASSENGER_ADULT = "1"

_LOGGER = logging.getLogger(__name__)

_PRICE_LOW_TO_HIGH = ("无座", "硬座", "二等座", "一等座", "软座", "硬卧", "商务特等座", "软卧", "高级软卧", "动卧")
_PRICE_HIGH_TO_LOW = ("动卧", "高级软卧", "软卧", "商务特等座", "硬卧", "软座", "一等座", "二等座", "硬座", "无座")

# Seat type indices that never take a candidate order: "other" and "no seat".
_NO_CANDIDATE = frozenset({2, 6})

PARTIAL_MESSAGE = "当前车次已选席别余票不足，已开启余票不足自动提交，继续提交..."

_METHOD_MESSAGES = {
    TrainPriority.SUFFICIENT_TICKET: "检测到可预订的已选中车次，使用规则：余票充足的车次优先提交",
    TrainPriority.STRICT_TRAIN: "检测到可预订的已选中车次，使用规则：按选中车次的顺序提交",
    TrainPriority.TRAVEL_TIME_SHORT: "检测到可预订的已选中车次，使用规则：行程时间短的车次优先提交",
    TrainPriority.STRICT_START_TIME: "检测到可预订的已选中车次，使用规则：按列车发车时间顺序提交",
}


class SeatPriority(enum.Enum):
    """Rule used to choose among the selected seat types of a train."""

    SUFFICIENT = "sufficient"
    STRICT = "strict"
    PRICE_LOW_WHEN_SUFFICIENT = "price_low_when_sufficient"
    PRICE_LOW = "price_low"
    PRICE_HIGH = "price_high"


@dataclass
class Passenger:
    """A passenger registered on the account."""

    name: str
    pass_type: str = PASSENGER_ADULT
    id_type_code: str = "1"
    id_no: str = ""
    mobile: str = ""
    all_enc_str: str = ""


@dataclass
class CandidateTrain:
    """A train on which a candidate (waiting list) order can be placed."""

    train_code: str
    secret: str
    seat_types: List[str] = field(default_factory=list)


def _chosen_message(index, count):
    remaining = "充足" if count == PLENTY else f"{count}张"
    return f"已选择席别{seat_type_description(index)}, 余票{remaining}"


def _fill_in_order(counts, order, passenger_count, log, announce):
    """Take tickets from seat types in the given order until every passenger has one."""
    allocation = []
    remain = passenger_count
    for index in order:
        count = counts[index]
        if count <= 0:
            continue
        allocation.append((index, min(count, remain)))
        if announce:
            log(_chosen_message(index, count))
        remain -= count
        if remain <= 0:
            break
    if remain > 0:
        log(PARTIAL_MESSAGE)
    return allocation


def _sufficient_first(counts, selected, passenger_count, log):
    log("正在选择席别，使用规则：余票充足的席别优先提交")
    best_count, best_index = 0, 0
    for index in selected:
        if counts[index] > best_count:
            best_count, best_index = counts[index], index

    allocation = []
    if best_count:
        allocation.append((best_index, min(best_count, passenger_count)))
        counts[best_index] -= best_count
        log(_chosen_message(best_index, best_count))

    if best_count < passenger_count:
        remain = passenger_count - best_count
        for index in selected:
            count = counts[index]
            if count <= 0:
                continue
            allocation.append((index, min(count, remain)))
            log(_chosen_message(index, count))
            remain -= count
            if remain <= 0:
                break
        if remain > 0:
            log(PARTIAL_MESSAGE)
    return allocation


def select_seats(ticket_counts, selected, passenger_count, priority, log=None):
    """Return a list of (seat type index, ticket count) to submit for a train.

    ``ticket_counts`` is indexed by seat type (see ``TrainRecord.ticket_counts``),
    ``selected`` holds the selected seat type indices in the user's order.
    The input counts are left unchanged.
    """
    log = log or _LOGGER.info
    counts = list(ticket_counts)
    selected = list(selected)

    if priority is SeatPriority.SUFFICIENT:
        return _sufficient_first(counts, selected, passenger_count, log)

    if priority is SeatPriority.STRICT:
        return _fill_in_order(counts, selected, passenger_count, log, announce=False)

    if priority is SeatPriority.PRICE_LOW_WHEN_SUFFICIENT:
        log("正在选择席别，使用规则：余票充足时价格低的席别优先提交")
        for index in seat_type_indices(_PRICE_LOW_TO_HIGH):
            if index in selected and counts[index] == PLENTY:
                log(_chosen_message(index, counts[index]))
                return [(index, passenger_count)]
        return _sufficient_first(counts, selected, passenger_count, log)

    if priority is SeatPriority.PRICE_LOW:
        log("正在选择席别，使用规则：价格低的席别优先提交")
        names = _PRICE_LOW_TO_HIGH
    else:
        log("正在选择席别，使用规则：价格高的席别优先提交")
        names = _PRICE_HIGH_TO_LOW
    order = [index for index in seat_type_indices(names) if index in selected]
    return _fill_in_order(counts, order, passenger_count, log, announce=True)


def _encode_name(name):
    return quote(name.encode("utf-8"), safe="")


def build_submit_strings(allocation, passengers, selected_names, has_second_class, is_student):
    """Build the passenger ticket strings for an order.

    Returns ``(passenger_ticket_str, old_passenger_str, submit_seat_types)``;
    the last one lists (passenger name, seat code) pairs. Passengers named in
    ``selected_names`` are served in order; names with no matching passenger
    record are skipped, as are seat types that cannot be submitted.
    """
    by_name = {}
    for passenger in passengers:
        by_name.setdefault(passenger.name, passenger)

    names = list(selected_names)
    ticket_parts, old_parts, seat_types = [], [], []
    position = 0
    for allocated, (seat_index, count) in enumerate(allocation):
        if allocated >= len(names) or position >= len(names):
            break
        code = submit_code(seat_index)
        if code == "0":
            continue
        if code == "W":
            code = "O" if has_second_class else "1"
        for _ in range(count):
            if position >= len(names):
                break
            passenger = by_name.get(names[position])
            position += 1
            if passenger is None:
                continue
            seat_types.append((passenger.name, code))
            if is_student or passenger.pass_type != "3":
                pass_type = passenger.pass_type
            else:
                pass_type = PASSENGER_ADULT
            encoded = _encode_name(passenger.name)
            ticket_parts.append(
                f"{code},0,{pass_type},{encoded},{passenger.id_type_code},"
                f"{passenger.id_no},{passenger.mobile},N,{passenger.all_enc_str}"
            )
            old_parts.append(f"{encoded},{passenger.id_type_code},{passenger.id_no},{pass_type}_")

    ticket_str = "_".join(ticket_parts).replace(",", "%2C")
    old_str = "".join(old_parts).replace(",", "%2C")
    return ticket_str, old_str, seat_types


def candidate_trains(trains, context, selected_names, force):
    """Return the selected trains on which candidate orders can be placed.

    ``selected_names`` are the selected seat type names. A seat type is
    requested when it has no tickets left, or always when ``force`` is true,
    unless the train reports too many candidate orders for it already.
    """
    selected_trains = set(context.selected_trains)
    indices = seat_type_indices(selected_names)
    names = list(selected_names)
    result = []
    for train in trains:
        if train is None or not train.secret or train.candidate_flag != "1":
            continue
        if train.description(context.station_names) not in selected_trains:
            continue
        counts = train.ticket_counts()
        candidate = CandidateTrain(train_code=train.code, secret=train.secret)
        for position, index in enumerate(indices):
            if index in _NO_CANDIDATE:
                continue
            if counts[index] != 0 and not force:
                continue
            name = names[position] if position < len(names) else ""
            code = description_to_submit_code(name)
            if code == "0" or code in train.candidate_seat_limit:
                continue
            if code not in candidate.seat_types:
                candidate.seat_types.append(code)
        result.append(candidate)
    return result


def analyse(trains, context, passengers, priority, is_student, log=None):
    """Choose a train and seats and build the order strings.

    ``passengers`` are the selected passengers' records. Returns
    ``(train index, passenger_ticket_str, old_passenger_str, submit_seat_types)``
    or None when no selected train can be booked.
    """
    log = log or _LOGGER.info
    index = select_train(trains, context)
    if index is None:
        return None

    train = trains[index]
    stations = context.station_names
    log(_METHOD_MESSAGES[context.priority])
    log(
        "已选中车次{} 始发站：{}, 终点站：{}, 出发站：{}, 到达站：{}, 出发时间：{}, 到达时间：{}, 历时：{}".format(
            train.code,
            stations.get(train.start_station_code, ""),
            stations.get(train.end_station_code, ""),
            stations.get(train.from_code, ""),
            stations.get(train.to_code, ""),
            train.start_time,
            train.arrive_time,
            train.spend_time,
        )
    )
    counts = train.ticket_counts()
    allocation = select_seats(counts, context.seat_indices, context.passenger_count, priority, log)
    ticket_str, old_str, seat_types = build_submit_strings(
        allocation,
        passengers,
        [passenger.name for passenger in passengers],
        counts[10] != -1,
        is_student,
    )
    log("正在生成提交信息...")
    return index, ticket_str, old_str, seat_types