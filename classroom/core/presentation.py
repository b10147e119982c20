import logging
from typing import Callable, List, Optional

from classroom.core.sequence_builder import build
from classroom.core.tally import Tally, VoteBoard
from classroom.core.timer import Scheduler, Timer, TimerMode, loop_scheduler
from classroom.models.session_config import (
    AgreeDisagreeConfig,
    FourThreeTwoConfig,
    QuestionCardsConfig,
    ThisOrThatConfig,
    TimedTalkConfig,
)
from classroom.models.slide import Slide, SlideType

logger = logging.getLogger(__name__)

DEFAULT_THINKING_SECONDS = 30
AUTO_ADVANCE_DELAY = 1.0


class Presentation:
    """
    Drives one presentation session: which slide is showing, the slide
    timer, the automatic thinking countdown and any tallies.

    Slide-entry side effects:
      - round(i) / card-revealed(i) / choice(i): slide timer reset to the
        configured duration, paused unless the config auto-starts it.
      - thinking: thinking countdown reset and started.
    With start_timer_on_input, the first vote or tally input on an untouched
    timed slide starts its timer. The exit slide is terminal; only restart()
    leaves it.
    """

    def __init__(
        self,
        config,
        thinking_seconds: int = DEFAULT_THINKING_SECONDS,
        scheduler: Optional[Scheduler] = None,
    ):
        self.config = config
        self.sequence = build(config)
        self.index = 0
        self.thinking_seconds = thinking_seconds
        self._scheduler = scheduler or loop_scheduler
        self._advance_handle = None
        self._listeners: List[Callable[[], None]] = []

        mode = TimerMode.COUNTDOWN
        if isinstance(config, TimedTalkConfig) and config.timer_mode == "countup":
            mode = TimerMode.COUNTUP

        self.timer = Timer(scheduler=self._scheduler, mode=mode, name="slide timer")
        self.timer.on_expire(self._on_timer_expired)
        self.thinking_timer = Timer(
            thinking_seconds, scheduler=self._scheduler, name="thinking timer"
        )

        self.tally: Optional[Tally] = None
        if isinstance(config, AgreeDisagreeConfig):
            self.tally = Tally(config.tally_options)

        self.votes: Optional[VoteBoard] = None
        if isinstance(config, ThisOrThatConfig):
            self.votes = VoteBoard(s.options for s in config.sets)

        self.timer.reset(self.initial_timer_seconds())

    # --- Queries ---

    @property
    def current(self) -> Slide:
        return self.sequence[self.index]

    @property
    def is_terminal(self) -> bool:
        return self.current.type == SlideType.EXIT

    @property
    def can_go_back(self) -> bool:
        return self.config.supports_previous and self.index > 0 and not self.is_terminal

    def initial_timer_seconds(self) -> int:
        config = self.config
        if isinstance(config, QuestionCardsConfig) and config.timer_enabled:
            return config.card_seconds
        if isinstance(config, TimedTalkConfig):
            return config.speaking_minutes * 60
        if (
            isinstance(config, ThisOrThatConfig)
            and config.timer_enabled
            and config.display_mode == "set_by_set"
        ):
            return config.timer_seconds
        return 0

    def timer_seconds_for(self, slide: Slide) -> Optional[int]:
        """Duration the slide timer takes on entering `slide`, None if untimed."""
        config = self.config
        if slide.type == SlideType.ROUND:
            if isinstance(config, FourThreeTwoConfig):
                return config.round_seconds(slide.index)
            if isinstance(config, TimedTalkConfig):
                return config.speaking_minutes * 60
        elif slide.type == SlideType.CARD_REVEALED:
            if isinstance(config, QuestionCardsConfig) and config.timer_enabled:
                return config.card_seconds
        elif slide.type == SlideType.CHOICE:
            if isinstance(config, ThisOrThatConfig) and config.timer_enabled:
                return config.timer_seconds
        return None

    # --- Navigation ---

    def subscribe(self, listener: Callable[[], None]):
        self._listeners.append(listener)

    def next(self) -> bool:
        if self.index >= len(self.sequence) - 1:
            return False
        self.index += 1
        self._enter(self.current)
        return True

    def previous(self) -> bool:
        if not self.can_go_back:
            return False
        self.index -= 1
        self._enter(self.current)
        return True

    def restart(self):
        self._cancel_advance()
        self.index = 0
        if self.tally:
            self.tally.reset()
        if self.votes:
            self.votes.reset()
        self.thinking_timer.reset(self.thinking_seconds)
        self.timer.reset(self.initial_timer_seconds())
        logger.info(f"Presentation restarted ({self.config.activity})")
        self._notify()

    def close(self):
        """Cancels every pending callback; call when the view goes away."""
        self._cancel_advance()
        self.timer.cancel()
        self.thinking_timer.cancel()

    # --- Timer controls ---

    def toggle_timer(self):
        # Play after expiry starts over from the slide's full duration
        if self.timer.expired:
            self.reset_timer()
        self.timer.toggle()

    def reset_timer(self):
        seconds = self.timer_seconds_for(self.current)
        if seconds is not None:
            self.timer.reset(seconds)

    # --- Tally controls ---

    def increment(self, key: str) -> int:
        count = self._require_tally().increment(key)
        self._on_input()
        self._notify()
        return count

    def decrement(self, key: str) -> int:
        count = self._require_tally().decrement(key)
        self._notify()
        return count

    def reset_tally(self):
        self._require_tally().reset()
        self._notify()

    def vote(self, option: str, set_index: Optional[int] = None) -> int:
        """
        Records one vote. On a choice slide the set is the one showing;
        on the all-at-once grid the caller names it with set_index.
        """
        board = self._require_votes()
        slide_type = self.current.type
        if slide_type == SlideType.CHOICE:
            set_index = self.current.index
        elif slide_type == SlideType.CHOICE_GRID:
            if set_index is None or not 0 <= set_index < len(board):
                raise ValueError(f"Invalid set index for the choice grid: {set_index!r}")
        else:
            raise ValueError(f"Cannot vote on a '{slide_type.value}' slide.")
        count = board.vote(set_index, option)
        self._on_input()
        self._notify()
        return count

    def reset_votes(self):
        self._require_votes().reset()
        self._notify()

    # --- Internals ---

    def _require_tally(self) -> Tally:
        if self.tally is None:
            raise ValueError(f"'{self.config.activity}' has no agree/disagree tally.")
        return self.tally

    def _require_votes(self) -> VoteBoard:
        if self.votes is None:
            raise ValueError(f"'{self.config.activity}' has no choice votes.")
        return self.votes

    def _on_input(self):
        if not self.config.start_timer_on_input:
            return
        timer = self.timer
        untouched = timer.total_seconds > 0 and timer.seconds_remaining == timer.total_seconds
        if self.timer_seconds_for(self.current) is not None and untouched:
            timer.start()

    def _enter(self, slide: Slide):
        self._cancel_advance()
        self.timer.pause()
        self.thinking_timer.pause()

        seconds = self.timer_seconds_for(slide)
        if seconds is not None:
            self.timer.reset(seconds)
            if self.config.auto_start_timer:
                self.timer.start()

        if slide.type == SlideType.THINKING:
            self.thinking_timer.reset(self.thinking_seconds)
            self.thinking_timer.start()

        logger.debug(f"Slide {self.index + 1}/{len(self.sequence)}: {slide}")
        self._notify()

    def _on_timer_expired(self):
        config = self.config
        if not (isinstance(config, ThisOrThatConfig) and config.auto_advance):
            return
        if self.current.type != SlideType.CHOICE:
            return
        following = self.sequence[self.index + 1]
        if following.type != SlideType.CHOICE:
            return
        expected = self.index
        self._cancel_advance()
        self._advance_handle = self._scheduler(
            AUTO_ADVANCE_DELAY, lambda: self._auto_advance(expected)
        )

    def _auto_advance(self, expected_index: int):
        self._advance_handle = None
        # The presenter may have navigated during the delay
        if self.index == expected_index:
            self.next()

    def _cancel_advance(self):
        if self._advance_handle is not None:
            self._advance_handle.cancel()
            self._advance_handle = None

    def _notify(self):
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.debug("Presentation listener failed", exc_info=True)
