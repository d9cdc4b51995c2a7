"""Rolling data behind the failure statistics bar chart and the latency line chart."""

BAR_SERIES = ("提交", "失败提交", "候补", "失败候补", "网络异常", "错误应答")
BAR_HOURS = tuple(str(hour) for hour in range(1, 13))
LINE_POINTS = 9

_BAR_INITIAL_Y_MAX = 30
_BAR_MIN_Y_MAX = 10
_LINE_MIN_Y_MAX = 100


class BarChartData:
    """Per-hour counters for each statistics series, newest hour first."""

    def __init__(self):
        self.title = "异常统计"
        self.x_title = "过去/小时"
        self.y_title = "次数"
        self.series = {label: [0] * len(BAR_HOURS) for label in BAR_SERIES}
        self.y_max = _BAR_INITIAL_Y_MAX
        self._value_max = 0
        self._value_max_age = 0

    def update(self, values):
        """Push one new value per series and return the new upper bound of the y axis.

        A sequence shorter than the number of series is ignored.
        """
        values = list(values)
        if len(values) < len(BAR_SERIES):
            return self.y_max

        new_max = False
        for label, value in zip(BAR_SERIES, values):
            row = self.series[label]
            row.pop()
            row.insert(0, value)
            if value > self._value_max:
                self._value_max = value
                self._value_max_age = 0
                new_max = True

        if not new_max:
            self._value_max_age += 1
            if self._value_max_age > len(BAR_HOURS) - 1:
                self._rescan()

        self.y_max = (
            self._value_max + 1 if self._value_max > _BAR_MIN_Y_MAX else _BAR_MIN_Y_MAX
        )
        return self.y_max

    def _rescan(self):
        self._value_max = 0
        self._value_max_age = 0
        for label in BAR_SERIES:
            for position, value in enumerate(self.series[label]):
                if value > self._value_max:
                    self._value_max = value
                    self._value_max_age = position


class LineChartData:
    """The last few latency samples, newest first."""

    def __init__(self, title="", x_title="", y_title=""):
        self.title = title
        self.x_title = x_title
        self.y_title = y_title
        self.legend_visible = True
        self.values = [0] * LINE_POINTS
        self.y_max = _LINE_MIN_Y_MAX
        self._value_max = 0
        self._value_max_age = 0

    @property
    def points(self):
        """The samples as (x, y) pairs."""
        return list(enumerate(self.values))

    def update(self, value):
        """Push a new sample and return the new upper bound of the y axis."""
        self.values.pop()
        self.values.insert(0, value)

        if value > self._value_max:
            self._value_max = value
        else:
            self._value_max_age += 1
            if self._value_max_age > len(self.values):
                self._rescan()

        self.y_max = (
            self._value_max + 1 if self._value_max > _LINE_MIN_Y_MAX else _LINE_MIN_Y_MAX
        )
        return self.y_max

    def _rescan(self):
        self._value_max = 0
        self._value_max_age = 0
        for position, value in enumerate(self.values):
            if value > self._value_max:
                self._value_max = value
                self._value_max_age = position