"""
Countdown timing for the Capital Quiz.
Runs the per-question countdown as a cancellable asyncio task.
"""
import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Optional

# Set up logger for timer operations
logger = logging.getLogger(__name__)

TickCallback = Callable[[int], Awaitable[Any]]
ExpireCallback = Callable[[], Awaitable[Any]]


class TimerLifecycleLogger:
    """Structured logging for timer lifecycle events."""

    @staticmethod
    def log_timer_created(label: str, duration: int) -> None:
        """Log timer creation."""
        logger.info(
            f"Timer lifecycle: CREATED - {label}, Duration {duration}s",
            extra={
                'event_type': 'timer_created',
                'label': label,
                'duration': duration,
                'timestamp': time.time()
            }
        )

    @staticmethod
    def log_timer_update(label: str, remaining_time: int, total_duration: int) -> None:
        """Log timer update events (throttled to avoid spam)."""
        if remaining_time % 5 == 0 or remaining_time <= 3:
            progress_percent = ((total_duration - remaining_time) / total_duration) * 100
            logger.debug(
                f"Timer lifecycle: UPDATE - {label}, Remaining {remaining_time}s ({progress_percent:.1f}% complete)",
                extra={
                    'event_type': 'timer_update',
                    'label': label,
                    'remaining_time': remaining_time,
                    'total_duration': total_duration,
                    'progress_percent': progress_percent,
                    'timestamp': time.time()
                }
            )

    @staticmethod
    def log_timer_completion(label: str, completion_type: str, total_duration: int) -> None:
        """Log timer completion (natural expiry or cancellation)."""
        logger.info(
            f"Timer lifecycle: COMPLETED - {label}, Type {completion_type}, Duration {total_duration}s",
            extra={
                'event_type': 'timer_completed',
                'label': label,
                'completion_type': completion_type,
                'total_duration': total_duration,
                'timestamp': time.time()
            }
        )

    @staticmethod
    def log_timer_state_transition(label: str, from_state: str, to_state: str, reason: str = None) -> None:
        """Log timer state transitions."""
        logger.debug(
            f"Timer lifecycle: STATE_TRANSITION - {label}, {from_state} -> {to_state}" +
            (f" ({reason})" if reason else ""),
            extra={
                'event_type': 'timer_state_transition',
                'label': label,
                'from_state': from_state,
                'to_state': to_state,
                'reason': reason,
                'timestamp': time.time()
            }
        )

    @staticmethod
    def log_timer_error(label: str, error_type: str, error_message: str, operation: str) -> None:
        """Log timer-related errors with context."""
        logger.error(
            f"Timer lifecycle: ERROR - {label}, Operation {operation}, Type {error_type}: {error_message}",
            extra={
                'event_type': 'timer_error',
                'label': label,
                'error_type': error_type,
                'error_message': error_message,
                'operation': operation,
                'timestamp': time.time()
            }
        )

    @staticmethod
    def log_stale_timer_detected(label: str, details: str) -> None:
        """Log a timer that was still running when a new one was requested."""
        logger.warning(
            f"Timer lifecycle: STALE_TIMER - {label}: {details}",
            extra={
                'event_type': 'timer_stale',
                'label': label,
                'details': details,
                'timestamp': time.time()
            }
        )


class QuizTimer:
    """Countdown timer for a single quiz question."""

    def __init__(self, label: str = "question", tick_interval: float = 1.0):
        """
        Initialize the timer.

        Args:
            label: Name used in log records
            tick_interval: Seconds of wall time per countdown step
        """
        self._task: Optional[asyncio.Task] = None
        self._remaining_time = 0
        self._total_duration = 0
        self._is_cancelled = False
        self._label = label
        self._tick_interval = tick_interval

    def start(
        self,
        duration: int,
        update_callback: TickCallback,
        completion_callback: ExpireCallback
    ) -> asyncio.Task:
        """
        Schedule the countdown on the running event loop.

        Returns:
            The task running the countdown
        """
        self._task = asyncio.create_task(
            self.start_countdown(duration, update_callback, completion_callback)
        )
        return self._task

    async def start_countdown(
        self,
        duration: int,
        update_callback: TickCallback,
        completion_callback: ExpireCallback
    ) -> None:
        """
        Run a countdown with callbacks for updates and expiry.

        Args:
            duration: Timer duration in seconds
            update_callback: Called with the remaining time, first with the
                full duration and then after every tick
            completion_callback: Called when the countdown reaches zero
                without being cancelled
        """
        self._remaining_time = duration
        self._total_duration = duration
        self._is_cancelled = False

        TimerLifecycleLogger.log_timer_state_transition(self._label, "created", "running")

        try:
            await update_callback(self._remaining_time)
            while self._remaining_time > 0 and not self._is_cancelled:
                await asyncio.sleep(self._tick_interval)
                if self._is_cancelled:
                    break
                self._remaining_time -= 1
                TimerLifecycleLogger.log_timer_update(
                    self._label,
                    self._remaining_time,
                    self._total_duration
                )
                await update_callback(self._remaining_time)

            # Let a submission queued in the same tick run first
            await asyncio.sleep(0)

            if self._is_cancelled:
                TimerLifecycleLogger.log_timer_completion(self._label, "cancelled", self._total_duration)
                return

            TimerLifecycleLogger.log_timer_completion(self._label, "natural_expiry", self._total_duration)
            await completion_callback()

        except asyncio.CancelledError:
            self._is_cancelled = True
            TimerLifecycleLogger.log_timer_completion(self._label, "asyncio_cancelled", self._total_duration)
            raise
        except Exception as e:
            TimerLifecycleLogger.log_timer_error(
                self._label,
                "countdown_execution_error",
                str(e),
                "start_countdown"
            )
            raise

    def cancel(self) -> None:
        """Cancel the countdown timer."""
        TimerLifecycleLogger.log_timer_state_transition(
            self._label,
            "running",
            "cancelled",
            "cancel requested"
        )
        self._is_cancelled = True
        # A timer may be cancelled from its own expiry callback; that task finishes on its own
        if self._task and not self._task.done() and self._task is not asyncio.current_task():
            self._task.cancel()

    @property
    def label(self) -> str:
        return self._label

    @property
    def task(self) -> Optional[asyncio.Task]:
        return self._task

    @property
    def is_cancelled(self) -> bool:
        """Check if timer is cancelled."""
        return self._is_cancelled

    @property
    def is_running(self) -> bool:
        """Check if the countdown task is still pending."""
        return self._task is not None and not self._task.done() and not self._is_cancelled

    @property
    def remaining_time(self) -> int:
        """Get remaining time in seconds."""
        return self._remaining_time


class QuizEngine:
    """Owns the countdown of the question currently on screen."""

    # Maximum time to wait for a cancelled countdown task to finish
    CANCEL_WAIT_SECONDS = 2.0

    def __init__(self, tick_interval: float = 1.0):
        """
        Initialize the quiz engine.

        Args:
            tick_interval: Seconds of wall time per countdown step
        """
        self.tick_interval = tick_interval
        self._timer: Optional[QuizTimer] = None

    def start_question_timer(
        self,
        label: str,
        duration: int,
        update_callback: TickCallback,
        completion_callback: ExpireCallback
    ) -> QuizTimer:
        """
        Start the countdown for a question, replacing any previous countdown.

        Args:
            label: Name of the question used in log records
            duration: Timer duration in seconds
            update_callback: Called with the remaining time
            completion_callback: Called when the countdown expires

        Returns:
            The started timer
        """
        previous = self._timer
        if previous is not None:
            if previous.is_running and previous.task is not asyncio.current_task():
                TimerLifecycleLogger.log_stale_timer_detected(
                    label,
                    "previous countdown still running, cancelling it"
                )
            previous.cancel()

        timer = QuizTimer(label, self.tick_interval)
        self._timer = timer
        timer.start(duration, update_callback, completion_callback)
        TimerLifecycleLogger.log_timer_created(label, duration)
        return timer

    async def cancel_timer(self) -> bool:
        """
        Cancel the current countdown and wait for its task to finish.

        Returns:
            True if a running timer was cancelled, False if there was none
        """
        timer = self._timer
        self._timer = None
        if timer is None or not timer.is_running:
            logger.debug("No active timer to cancel")
            return False

        timer.cancel()
        task = timer.task
        if task is None or task is asyncio.current_task():
            return True

        done, _ = await asyncio.wait({task}, timeout=self.CANCEL_WAIT_SECONDS)
        if not done:
            TimerLifecycleLogger.log_timer_error(
                timer.label,
                "cancellation_timeout",
                f"Timer task did not finish within {self.CANCEL_WAIT_SECONDS}s",
                "cancel_timer"
            )
        return True

    def get_timer_status(self) -> Optional[dict]:
        """
        Get the status of the current countdown.

        Returns:
            Dictionary with timer status or None if no timer was started
        """
        if self._timer is None:
            return None
        return {
            'remaining_time': self._timer.remaining_time,
            'is_cancelled': self._timer.is_cancelled,
            'is_running': self._timer.is_running
        }
