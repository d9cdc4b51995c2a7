"""Trains temporarily excluded from selection for a number of seconds."""


class FrozenTrains:
    """Countdown table of frozen train descriptions.

    Call :meth:`tick` once a second while :attr:`active` is true.
    """

    def __init__(self):
        self._remaining = {}

    def add(self, description, seconds):
        """Freeze a train for the given number of seconds, replacing any earlier entry."""
        self._remaining[description] = seconds

    def remove(self, description):
        """Unfreeze a train; unknown descriptions are ignored."""
        self._remaining.pop(description, None)

    def is_frozen(self, description):
        """Return whether the train is currently frozen."""
        return description in self._remaining

    def remaining(self, description):
        """Return the seconds left for a frozen train."""
        return self._remaining[description]

    @property
    def active(self):
        """Whether any train is frozen, i.e. whether the countdown should run."""
        return bool(self._remaining)

    def tick(self):
        """Advance the countdown by one second and return the trains that expired."""
        expired = []
        for description in sorted(self._remaining):
            left = self._remaining[description] - 1
            if left <= 0:
                del self._remaining[description]
                expired.append(description)
            else:
                self._remaining[description] = left
        return expired

    def __contains__(self, description):
        return self.is_frozen(description)

    def __len__(self):
        return len(self._remaining)