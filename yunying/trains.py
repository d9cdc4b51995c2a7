"""Train records from a ticket query and the rules that pick one train to book."""

import enum
from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional, Sequence

from yunying.seattypes import SEAT_TYPE_COUNT, parse_ticket_count, seat_type_indices

# Seat type indices that carry a remaining-ticket cell in a query result:
# business, first class, second class, deluxe soft sleeper, soft sleeper,
# bullet sleeper, hard sleeper, soft seat, hard seat, no seat, other.
SEAT_COLUMNS = (12, 11, 10, 1, 3, 7, 8, 4, 9, 6, 2)

_INT_MAX = 2**31 - 1


def _to_int(text, default=0):
    try:
        return int(text.strip())
    except ValueError:
        return default


@dataclass
class TrainRecord:
    """One train from a remaining-ticket query.

    ``seats`` maps a seat type index to the remaining-ticket cell shown for it
    ("有", "无", a number, "*" or empty).
    """

    code: str
    from_code: str = ""
    to_code: str = ""
    start_time: str = ""
    arrive_time: str = ""
    spend_time: str = ""
    seats: Mapping[int, str] = field(default_factory=dict)
    train_no: str = ""
    start_station_code: str = ""
    end_station_code: str = ""
    secret: str = ""
    candidate_flag: str = ""
    candidate_seat_limit: str = ""

    def description(self, station_names):
        """Return the key used to select this train: "CODE (FROM TO"."""
        return "{} ({} {}".format(
            self.code,
            station_names.get(self.from_code, ""),
            station_names.get(self.to_code, ""),
        )

    def ticket_counts(self):
        """Return remaining tickets per seat type index.

        100 means plenty, 0 none and -1 that the seat type is not offered;
        seat types without a cell in a query result stay 0.
        """
        counts = [0] * SEAT_TYPE_COUNT
        for index in SEAT_COLUMNS:
            counts[index] = parse_ticket_count(self.seats.get(index, ""))
        return counts


class TrainPriority(enum.Enum):
    """Rule used to choose among the selected trains."""

    SUFFICIENT_TICKET = "sufficient_ticket"
    STRICT_TRAIN = "strict_train"
    TRAVEL_TIME_SHORT = "travel_time_short"
    STRICT_START_TIME = "strict_start_time"


@dataclass
class SelectionContext:
    """What the user selected and how trains should be chosen."""

    seat_types: Sequence[str]
    passenger_count: int
    selected_trains: Sequence[str]
    station_names: Mapping[str, str] = field(default_factory=dict)
    frozen: object = frozenset()
    partial_submit: bool = False
    prefer_g: bool = False
    prefer_d: bool = False
    in_time_range: Optional[Callable[[int, int], bool]] = None
    priority: TrainPriority = TrainPriority.SUFFICIENT_TICKET

    @property
    def seat_indices(self):
        return seat_type_indices(self.seat_types)


def _available(counts, seat_indices):
    return sum(counts[index] for index in seat_indices if counts[index] > 0)


def _candidates(trains, context):
    """Yield (index, train, ticket total) for selected, unfrozen trains in list order."""
    selected = set(context.selected_trains)
    seat_indices = context.seat_indices
    for index, train in enumerate(trains):
        if train is None:
            continue
        description = train.description(context.station_names)
        if description in context.frozen or description not in selected:
            continue
        yield index, train, _available(train.ticket_counts(), seat_indices)


def _filtered_out(train, context):
    code = train.code
    if context.prefer_g and code and code[0] != "G":
        return True
    if context.prefer_d and code and code[0] != "D":
        return True
    if context.in_time_range is not None:
        parts = train.start_time.split(":")
        hour = _to_int(parts[0]) if len(parts) > 0 else 0
        minute = _to_int(parts[1]) if len(parts) > 1 else 0
        if not context.in_time_range(hour, minute):
            return True
    return False


def sufficient_ticket_train(trains, context):
    """Pick the selected train with the most tickets in the selected seat types.

    Preferences (G trains, D trains, start time range) are applied first; if
    they exclude every train that has tickets, the choice is made without them.
    Returns the train's index, or None.
    """
    candidates = list(_candidates(trains, context))

    def best(apply_preferences):
        best_total, best_index, filtered = 0, None, False
        for index, train, total in candidates:
            if apply_preferences and _filtered_out(train, context):
                filtered = True
                continue
            if total > best_total:
                best_total, best_index = total, index
        return best_total, best_index, filtered

    best_total, best_index, filtered = best(True)
    if filtered and best_index is None:
        best_total, best_index, _ = best(False)

    if not context.partial_submit and best_total < context.passenger_count:
        return None
    return best_index


def strict_train_order(trains, context):
    """Pick the first train, in the order the user selected them, with enough tickets.

    With partial submission allowed, falls back to the train with the most
    tickets. Returns the train's index, or None.
    """
    by_description = {
        train.description(context.station_names): index
        for index, train in enumerate(trains)
        if train is not None
    }
    seat_indices = context.seat_indices
    partial_max, partial_index = 0, None
    for description in context.selected_trains:
        if description in context.frozen:
            continue
        index = by_description.get(description)
        if index is None:
            continue
        total = _available(trains[index].ticket_counts(), seat_indices)
        if total >= context.passenger_count:
            return index
        if context.partial_submit and total > partial_max:
            partial_max, partial_index = total, index
    return partial_index


def _travel_time(text):
    parts = [part for part in text.split(":") if part]
    hours = _to_int(parts[0]) if len(parts) > 0 else _INT_MAX
    minutes = _to_int(parts[1]) if len(parts) > 1 else _INT_MAX
    return hours, minutes


def shortest_travel_time_train(trains, context):
    """Pick the train with enough tickets and the shortest travel time.

    With partial submission allowed and no such train, falls back to the train
    with the most tickets. Returns the train's index, or None.
    """
    shortest, shortest_index = (_INT_MAX, _INT_MAX), None
    partial_max, partial_index = 0, None
    for index, train, total in _candidates(trains, context):
        if total >= context.passenger_count:
            travel = _travel_time(train.spend_time)
            if travel < shortest:
                shortest, shortest_index = travel, index
        if context.partial_submit and total > partial_max:
            partial_max, partial_index = total, index
    return shortest_index if shortest_index is not None else partial_index


def earliest_start_train(trains, context):
    """Pick the first train in list order (by departure) with enough tickets.

    With partial submission allowed, falls back to the train with the most
    tickets. Returns the train's index, or None.
    """
    partial_max, partial_index = 0, None
    for index, _train, total in _candidates(trains, context):
        if total >= context.passenger_count:
            return index
        if context.partial_submit and total > partial_max:
            partial_max, partial_index = total, index
    return partial_index


_RULES = {
    TrainPriority.SUFFICIENT_TICKET: sufficient_ticket_train,
    TrainPriority.STRICT_TRAIN: strict_train_order,
    TrainPriority.TRAVEL_TIME_SHORT: shortest_travel_time_train,
    TrainPriority.STRICT_START_TIME: earliest_start_train,
}


def select_train(trains, context):
    """Pick a train using the rule named by ``context.priority``."""
    return _RULES[context.priority](trains, context)