"""
Presentation engine shared by every speaking activity.

Contains:
- Timer: one-second countdown with expiry listeners
- build: SessionConfig -> ordered slides
- Presentation: slide navigation with timer and tally side effects
- Tally / VoteBoard: live vote counts
"""

from classroom.core.presentation import Presentation
from classroom.core.sequence_builder import build
from classroom.core.tally import Tally, VoteBoard
from classroom.core.timer import Timer, TimerMode, format_clock
