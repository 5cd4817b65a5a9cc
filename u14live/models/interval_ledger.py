"""
Interval ledger for the U14 Live match tracker.

Pure functions over a player's interval list: elapsed playing time as of
"now", closing the running interval and opening a new one.
"""
from typing import List

from .interval import ClosedInterval, Interval, OpenInterval
from ..exceptions import IntervalStateError
from ..utils import HALF_DURATION_SECONDS


class IntervalLedger:
    """Computes and updates playing intervals for a single player."""

    @staticmethod
    def effective_end(interval: Interval, current_half: int, current_time: int) -> int:
        """
        Return where an interval ends as of the given match instant.

        An open interval of the current half runs until ``current_time``. An
        open interval left over from an earlier half counts as having run to
        the end of that half.
        """
        if isinstance(interval, ClosedInterval):
            return interval.end
        if interval.half == current_half:
            return current_time
        return HALF_DURATION_SECONDS

    @staticmethod
    def elapsed_seconds(intervals: List[Interval], current_half: int, current_time: int) -> int:
        """
        Total seconds played across all intervals.

        Args:
            intervals: Player's intervals in chronological order
            current_half: Half the match is currently in
            current_time: Seconds elapsed in the current half

        Returns:
            Sum of interval lengths, each clamped at 0
        """
        total = 0
        for interval in intervals:
            end = IntervalLedger.effective_end(interval, current_half, current_time)
            total += max(0, end - interval.start)
        return total

    @staticmethod
    def close_open_interval(intervals: List[Interval], half: int, at_time: int) -> bool:
        """
        Close the last interval at ``at_time`` if it is open and belongs to ``half``.

        Returns:
            True if an interval was closed, False when there was nothing to close
        """
        if not intervals:
            return False
        last = intervals[-1]
        if not isinstance(last, OpenInterval) or last.half != half:
            return False
        intervals[-1] = last.close(at_time)
        return True

    @staticmethod
    def open_interval(intervals: List[Interval], half: int, at_time: int) -> None:
        """
        Append a new open interval starting at ``at_time``.

        Raises:
            IntervalStateError: If the last interval is still open
        """
        if intervals and intervals[-1].is_open:
            raise IntervalStateError(
                f"Cannot open an interval at {at_time}s while {intervals[-1]} is open"
            )
        intervals.append(OpenInterval(half=half, start=at_time))
