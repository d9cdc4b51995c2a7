# yunying

Decision logic for a railway ticket client, in plain Python with no
dependencies beyond the standard library. It decides which train and which
seat types to book, builds the order submission strings, completes station
names as they are typed, rotates among CDN hosts and checks login input.

## Modules

### `yunying.seattypes`

Seat types are numbered 0–13.

- `seat_type_indices(names)` – indices for seat type names such as `"二等座"`,
  in the order of the names.
- `seat_type_description(index)` – the display name, or `"Unknown"`.
- `submit_code(index)` – the one-character order code; raises `IndexError`
  for an index outside 0–13.
- `description_to_submit_code(description)` – the code for a display name,
  `"0"` when there is none.
- `parse_ticket_count(text)` – a remaining-ticket cell as a number: `"有"` is
  100 (plenty), `"无"` is 0, an empty cell or `"*"` is -1 (not offered),
  anything else is read as an integer (0 if it is not one).

### `yunying.trains`

- `TrainRecord` – one train from a ticket query; `description(station_names)`
  gives the selection key `"CODE (FROM TO"`, `ticket_counts()` a 14-slot list
  of remaining tickets per seat type.
- `TrainPriority` – `SUFFICIENT_TICKET`, `STRICT_TRAIN`, `TRAVEL_TIME_SHORT`,
  `STRICT_START_TIME`.
- `SelectionContext` – selected seat type names, passenger count, selected
  train keys, station names, frozen trains, partial submission, G/D train
  preferences, an optional start-time check and the priority.
- `sufficient_ticket_train`, `strict_train_order`,
  `shortest_travel_time_train`, `earliest_start_train` and `select_train`
  (which dispatches on `context.priority`) return the chosen train's index in
  the list, or `None`.

### `yunying.seats`

- `SeatPriority` – `SUFFICIENT`, `STRICT`, `PRICE_LOW_WHEN_SUFFICIENT`,
  `PRICE_LOW`, `PRICE_HIGH`.
- `select_seats(ticket_counts, selected, passenger_count, priority, log=None)`
  – a list of `(seat type index, tickets)` pairs; progress messages go to
  `log` (by default the module's logger).
- `Passenger` and `build_submit_strings(allocation, passengers,
  selected_names, has_second_class, is_student)` – returns
  `(passenger_ticket_str, old_passenger_str, submit_seat_types)`, with names
  percent-encoded and commas written as `%2C`.
- `CandidateTrain` and `candidate_trains(trains, context, selected_names,
  force)` – trains and seat codes on which a waiting-list order can be placed.
- `analyse(trains, context, passengers, priority, is_student, log=None)` –
  train choice, seat choice and order strings in one pass; returns
  `(index, passenger_ticket_str, old_passenger_str, submit_seat_types)` or
  `None`.

### `yunying.frozen`

`FrozenTrains` – trains excluded from selection for a number of seconds:
`add`, `remove`, `is_frozen` (also `in`), `remaining`, `active`, and `tick()`,
which counts down one second and returns the trains that expired.

### `yunying.cdn`

`CdnPool(enabled=True, rng=None)` – hosts waiting to be tested and hosts that
passed: `add`, `add_many`, `add_available`, `mark_result(ok)`,
`test_all(check=probe)`, `clear`, `clear_available`, and `next()`,
`current()`, `random()` over the working hosts (`None` when there are none or
the pool is disabled). `main` holds the host chosen for login;
`remove_main()` forgets it. `probe(host)` tries a TLS handshake on port 443
with a three-second timeout.

### `yunying.completer`

- `Station` and `parse_station_data(text)` – records of the form
  `@abbr|name|code|full pinyin|simple pinyin|...`.
- `StationCompleter` – `add_station`, `load(text)`, `station_codes`, and
  `update(word)`, which takes the current input text and returns the
  completion list (`"NAME fullpinyin"` entries), stepping back through
  earlier results as characters are deleted.
- `captcha_area(x, y, width, height)` – which of the eight captcha tiles
  (1–8, row by row) a click falls in, or 0.

### `yunying.charts`

`BarChartData` (six statistics series over the last twelve hours) and
`LineChartData` (the last nine latency samples). Each `update` pushes the
newest values in front and returns the new upper bound of the y axis.

### `yunying.login`

- `verify_credentials(username, password)` and `verify_sms(id_suffix, code)`
  return the trimmed input or raise `LoginError` with the message to show.
- `QrCodeStatus` (with `stops_polling`) and `qr_status_message(status)`.
- `SmsCooldown` – the 60-second wait before another SMS code may be
  requested: `start`, `tick`, `active`, `label`, `can_send`.

## Example

```python
from yunying.seattypes import seat_type_indices, submit_code
from yunying.frozen import FrozenTrains
from yunying.login import SmsCooldown, verify_credentials

indices = seat_type_indices(["二等座", "一等座"])   # [10, 11]
codes = [submit_code(i) for i in indices]          # ['O', 'M']

frozen = FrozenTrains()
frozen.add("G1 (北京 上海", 2)
frozen.tick()
frozen.tick()                                      # ['G1 (北京 上海']
frozen.is_frozen("G1 (北京 上海")                   # False

password = "password"
verify_credentials(" user ", password)              # ('user', 'password')

cooldown = SmsCooldown()
cooldown.start()                                   # '60'
cooldown.tick()                                    # '59'
```

## What it does not do

There is no graphical interface, no command, and no network client for
querying tickets, logging in or submitting orders: the functions take the
query results and user choices as arguments and return decisions and
strings. Station data is not downloaded, and settings are not stored. The
only network access is `yunying.cdn.probe`, used by `CdnPool.test_all`
unless another check is passed in.

## Installing

```
pip install .
```

## Running the tests

```
pip install .[test]
pytest
```