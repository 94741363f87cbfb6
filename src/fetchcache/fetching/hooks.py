"""
Progress and failure-notification hooks invoked around an origin fetch.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol

from fetchcache.infrastructure.observability.logger import get_logger

logger = get_logger(__name__)

DEFAULT_FAILURE_MESSAGE = "Error retrieving data. Please make sure you are connected to the Internet."


class ProgressIndicator(Protocol):
    def show(self, **options: Any) -> None: ...

    def hide(self) -> None: ...


class FailureNotifier(Protocol):
    def __call__(self, message: str) -> None: ...


@dataclass
class FetchHooks:
    """
    Optional callbacks around an origin fetch.

    Attributes:
        on_start: Called before the fetch starts
        on_end: Called once the fetch settles, on success and on failure
        on_error: Called with (failure_message, exception) after on_end when the fetch fails
        failure_message: Human-readable text handed to on_error
    """

    on_start: Optional[Callable[[], Any]] = None
    on_end: Optional[Callable[[], Any]] = None
    on_error: Optional[Callable[[str, BaseException], Any]] = None
    failure_message: str = DEFAULT_FAILURE_MESSAGE

    @classmethod
    def from_collaborators(
        cls,
        indicator: Optional[ProgressIndicator] = None,
        notifier: Optional[FailureNotifier] = None,
        *,
        message: str = DEFAULT_FAILURE_MESSAGE,
    ) -> "FetchHooks":
        """Adapt a show/hide loading indicator and a message notifier."""
        return cls(
            on_start=(lambda: indicator.show(no_backdrop=True)) if indicator else None,
            on_end=indicator.hide if indicator else None,
            on_error=(lambda msg, _exc: notifier(msg)) if notifier else None,
            failure_message=message,
        )

    def start(self) -> None:
        self._call("on_start", self.on_start)

    def end(self) -> None:
        self._call("on_end", self.on_end)

    def error(self, exc: BaseException) -> None:
        self._call("on_error", self.on_error, self.failure_message, exc)

    @staticmethod
    def _call(name: str, hook: Optional[Callable[..., Any]], *args: Any) -> None:
        # a broken hook must not change the fetch outcome
        if hook is None:
            return
        try:
            hook(*args)
        except Exception as e:
            logger.error("fetch_hook_failed", hook=name, error=str(e), exc_info=True)
