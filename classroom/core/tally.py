import logging
import math
from typing import Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)


class Tally:
    """Live vote count per option. Counts never drop below zero."""

    def __init__(self, options: Iterable[str]):
        self.options: List[str] = list(options)
        self.counts: Dict[str, int] = {key: 0 for key in self.options}

    def _check(self, key: str):
        if key not in self.counts:
            raise KeyError(f"Unknown tally option: {key!r}")

    def increment(self, key: str) -> int:
        self._check(key)
        self.counts[key] += 1
        return self.counts[key]

    def decrement(self, key: str) -> int:
        self._check(key)
        self.counts[key] = max(0, self.counts[key] - 1)
        return self.counts[key]

    def reset(self):
        for key in self.counts:
            self.counts[key] = 0

    def count(self, key: str) -> int:
        self._check(key)
        return self.counts[key]

    def total(self) -> int:
        return sum(self.counts.values())

    def percentage(self, key: str) -> int:
        self._check(key)
        total = self.total()
        if total == 0:
            return 0
        # Half rounds up, as in the browser's Math.round
        return int(math.floor(100 * self.counts[key] / total + 0.5))

    def leader(self) -> Optional[str]:
        """Option with the most votes, None when empty or tied at the top."""
        if self.total() == 0:
            return None
        best = max(self.counts.values())
        leaders = [k for k in self.options if self.counts[k] == best]
        return leaders[0] if len(leaders) == 1 else None

    def as_dict(self) -> Dict[str, int]:
        return dict(self.counts)


class VoteBoard:
    """One Tally per this-or-that set, keyed by set index."""

    def __init__(self, sets: Iterable[Iterable[str]]):
        self.tallies: List[Tally] = [Tally(options) for options in sets]

    def __len__(self) -> int:
        return len(self.tallies)

    def __getitem__(self, set_index: int) -> Tally:
        return self.tallies[set_index]

    def vote(self, set_index: int, option: str) -> int:
        return self.tallies[set_index].increment(option)

    def winner(self, set_index: int) -> Optional[str]:
        return self.tallies[set_index].leader()

    def total_votes(self) -> int:
        return sum(t.total() for t in self.tallies)

    def reset(self):
        for tally in self.tallies:
            tally.reset()
        logger.debug("Vote board reset")
