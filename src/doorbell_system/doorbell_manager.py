"""
Doorbell manager - runs the button pipeline, dispatcher and indicator loops
"""

import threading
import time
from typing import Callable, List, Optional, TYPE_CHECKING

from .edge_handoff import EdgeHandoff
from .shutdown import ShutdownCoordinator, EXIT_FATAL

if TYPE_CHECKING:
    from button_system.button_reader import ButtonReader
    from notify_system.publish_throttle import PublishThrottle
    from notify_system.dispatcher import Dispatcher
    from led_system.indicator_mirror import IndicatorMirror
    from utils import ClassLogger


class DoorbellManager:
    """
    Runs the doorbell loops as a task group until shutdown.

    Loops (one daemon thread each):
    - button-pipeline: sample + debounce at a fixed tick, hand edges over
    - dispatcher: throttle decision, then publish
    - indicator-mirror: raw line -> LED (only when configured)

    All loops observe the coordinator's cancellation event at their tick
    boundary. A failure in any loop is fatal and requests shutdown with
    exit status 1.
    """

    def __init__(self,
                 button_reader: 'ButtonReader',
                 throttle: 'PublishThrottle',
                 dispatcher: 'Dispatcher',
                 shutdown: ShutdownCoordinator,
                 logger: 'ClassLogger',
                 sample_interval_ms: int = 100,
                 indicator_mirror: Optional['IndicatorMirror'] = None,
                 handoff: Optional[EdgeHandoff] = None,
                 join_timeout_s: float = 1.0):
        """
        Args:
            button_reader: Sampler + debouncer for the button pin
            throttle: Cooldown throttle shared by all notifications
            dispatcher: Publishes admitted edges
            shutdown: Coordinator owning the cancellation event and GPIO release
            logger: Logger for lifecycle messages
            sample_interval_ms: Button sampling tick in milliseconds
            indicator_mirror: Optional LED mirror loop
            handoff: Edge hand-off between pipeline and dispatcher
            join_timeout_s: How long to wait for each loop after shutdown
        """
        self.button_reader = button_reader
        self.throttle = throttle
        self.dispatcher = dispatcher
        self.shutdown = shutdown
        self.indicator_mirror = indicator_mirror
        self.logger = logger
        self.handoff = handoff if handoff is not None else EdgeHandoff()
        self.target_sample_interval = sample_interval_ms / 1000.0
        self.join_timeout_s = join_timeout_s
        self._threads: List[threading.Thread] = []

    @property
    def cancel_event(self) -> threading.Event:
        return self.shutdown.cancel_event

    def start(self) -> None:
        """Start every loop in its own thread"""
        self._spawn("button-pipeline", self._run_button_pipeline)
        self._spawn("dispatcher", self._run_dispatcher)
        if self.indicator_mirror is not None:
            self._spawn("indicator-mirror", lambda: self.indicator_mirror.run(self.cancel_event))
        else:
            self.logger.debug("No indicator pin configured, mirror inactive")

    def run(self) -> int:
        """
        Start the loops and block until shutdown is requested.

        Returns:
            Exit status chosen by the shutdown request
        """
        self.start()
        self.logger.info("Started... waiting for button press")

        while not self.cancel_event.wait(0.5):
            pass

        self.shutdown.release()
        self.join()
        self.log_status()
        return self.shutdown.exit_code if self.shutdown.exit_code is not None else 0

    def stop(self, reason: str = "stopped") -> None:
        """Request a clean stop (exit status 0)"""
        self.shutdown.request_shutdown(reason, 0)

    def join(self) -> None:
        """Best-effort join; loops stuck in a tick are left to die with the process"""
        for thread in self._threads:
            thread.join(self.join_timeout_s)
            if thread.is_alive():
                self.logger.warning(f"Loop '{thread.name}' did not stop within {self.join_timeout_s}s")

    def log_status(self) -> None:
        self.logger.info(
            f"Status: {self.button_reader.press_count} presses, "
            f"{self.throttle.admitted_count} notifications admitted, "
            f"{self.throttle.dropped_count} throttled, "
            f"{self.dispatcher.published_count} published, "
            f"{self.dispatcher.failed_count} failed"
        )

    def _spawn(self, name: str, target: Callable[[], None]) -> None:
        thread = threading.Thread(target=self._guard, args=(name, target), name=name, daemon=True)
        self._threads.append(thread)
        thread.start()

    def _guard(self, name: str, target: Callable[[], None]) -> None:
        """Run a loop; any escaping exception is fatal unless we are already shutting down"""
        try:
            target()
        except Exception as e:
            if self.cancel_event.is_set():
                self.logger.debug(f"Loop '{name}' ended during shutdown: {e}")
                return
            self.logger.error(f"Loop '{name}' failed: {e}", exception=e)
            self.shutdown.request_shutdown(f"{name} failed: {e}", EXIT_FATAL)

    def _run_button_pipeline(self) -> None:
        while not self.cancel_event.is_set():
            tick_start = time.monotonic()

            edge = self.button_reader.read_edge()
            if edge is not None:
                self.handoff.put(edge, self.cancel_event)

            sleep_time = self.target_sample_interval - (time.monotonic() - tick_start)
            if sleep_time > 0:
                self.cancel_event.wait(sleep_time)

    def _run_dispatcher(self) -> None:
        while not self.cancel_event.is_set():
            edge = self.handoff.take(self.cancel_event)
            if edge is None:
                continue

            admitted = self.throttle.admit()
            self.handoff.done()

            if admitted:
                self.dispatcher.dispatch(edge)
            else:
                self.logger.debug(
                    f"Throttled {edge}: {self.throttle.remaining_s():.1f}s of cooldown left"
                )
