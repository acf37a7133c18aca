"""
Concurrency-safe variable store.

Protocol parsing (network thread) and script execution (foreground thread)
read and write the same variables. `VariableStore` guards its bindings with a
readers-writer lock: any number of concurrent `get` calls, one writer at a
time, and readers never see a half-applied write.

Change notifications are posted to an `Events` sink from a dedicated
single-worker executor, so a slow subscriber can never stall `set`.

Some keys are *dynamic*: they are registered once, evaluated on every read and
cannot be overwritten by `set`. `GlobalVariables` registers `date`,
`datetime` and `time`, formatted from an injected clock.

Example:
    store = GlobalVariables(events=hub)
    store.set("roomid", "42")
    store.get("roomid")   # "42"
    store.get("time")     # "08:15:02 PM"
"""

from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Iterator, Optional, Protocol, Final
import threading
from mudscript.config.settings import appsettings
from mudscript.lib.events import Events, NulloEvents
from mudscript.lib.log import LOG
from mudscript.models.dataModel import DynamicKind, DynamicValue


class Clock(Protocol):
    """Source of the current time for computed variables."""

    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock, or any callable returning a datetime."""

    def __init__(self, get_date: Callable[[], datetime] = datetime.now) -> None:
        self._get_date: Callable[[], datetime] = get_date

    def now(self) -> datetime:
        return self._get_date()


class ReadWriteLock:
    """Many readers or one writer.

    Waiting writers block new readers, so a steady stream of `get` calls
    cannot starve `set`.
    """

    def __init__(self) -> None:
        self._cond: threading.Condition = threading.Condition(threading.Lock())
        self._readers: int = 0
        self._writer: bool = False
        self._writers_waiting: int = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            while self._writer or self._readers:
                self._cond.wait()
            self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class VariableStore:
    """Mapping of variable name to `DynamicValue`.

    Attributes:
        event_key: Event name posted on change; empty disables notifications
        events: Sink receiving `{key: value}` change notifications
        clock: Time source for computed values
    """

    def __init__(
        self,
        event_key: str = "",
        events: Optional[Events] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.event_key: str = event_key
        self.events: Events = events if events is not None else NulloEvents()
        self.clock: Clock = clock if clock is not None else SystemClock()
        self._lock: ReadWriteLock = ReadWriteLock()
        self._vars: dict[str, DynamicValue] = {}
        self._dynamic_keys: set[str] = set()
        self._closed: bool = False
        self._delivery: ThreadPoolExecutor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="variable-events"
        )

        self.add_dynamics()

    def evaluate(self, value: DynamicValue) -> Optional[str]:
        """Compute the current string for a binding."""
        if value.computed is None:
            return value.literal
        formats: dict[DynamicKind, str] = {
            DynamicKind.CURRENT_DATE: appsettings.variable_date_format,
            DynamicKind.CURRENT_DATETIME: appsettings.variable_datetime_format,
            DynamicKind.CURRENT_TIME: appsettings.variable_time_format,
        }
        return self.clock.now().strftime(formats[value.computed])

    def get(self, key: str) -> Optional[str]:
        with self._lock.read():
            value: Optional[DynamicValue] = self._vars.get(key)
        if value is None:
            return None
        return self.evaluate(value)

    def set(self, key: str, value: Optional[str]) -> None:
        """Store a literal binding and post a change notification.

        Does nothing for dynamic keys or when the stored value is unchanged.
        `None` is stored as the empty string.
        """
        text: str = value if value is not None else ""
        with self._lock.write():
            if key in self._dynamic_keys:
                return
            current: Optional[DynamicValue] = self._vars.get(key)
            if current is not None and self.evaluate(current) == text:
                return
            self._vars[key] = DynamicValue.of(text)
            self._notify(key, text)

    def remove(self, key: str) -> None:
        with self._lock.write():
            if key in self._dynamic_keys:
                return
            self._vars.pop(key, None)

    def clear(self) -> None:
        """Remove every binding, then re-register the dynamic keys."""
        with self._lock.write():
            self._vars.clear()
            self._dynamic_keys.clear()
            self.add_dynamics()

    def snapshot(self) -> list[tuple[str, str]]:
        """All bindings sorted by key, computed values evaluated now."""
        with self._lock.read():
            items: list[tuple[str, DynamicValue]] = sorted(self._vars.items())
        return [(key, self.evaluate(value) or "") for key, value in items]

    def keys(self) -> list[str]:
        """Variable names, longest first."""
        with self._lock.read():
            return sorted(self._vars, key=len, reverse=True)

    def is_dynamic(self, key: str) -> bool:
        with self._lock.read():
            return key in self._dynamic_keys

    def add_dynamic(self, key: str, kind: DynamicKind) -> None:
        """Register a computed binding; only call from `add_dynamics`."""
        self._dynamic_keys.add(key)
        self._vars[key] = DynamicValue.dynamic(kind)

    def add_dynamics(self) -> None:
        """Hook for subclasses to register their dynamic keys."""

    def flush(self, timeout: Optional[float] = None) -> None:
        """Block until every notification posted so far has been delivered."""
        if self._closed:
            return
        self._delivery.submit(lambda: None).result(timeout=timeout)

    def close(self) -> None:
        """Deliver pending notifications; later changes are stored but not posted."""
        with self._lock.write():
            self._closed = True
        self._delivery.shutdown(wait=True)

    def _notify(self, key: str, value: str) -> None:
        if not self.event_key:
            return
        if self._closed:
            LOG(f"Store closed; change to '{key}' not posted")
            return
        self._delivery.submit(self._post, key, value)

    def _post(self, key: str, value: str) -> None:
        try:
            self.events.post(self.event_key, {key: value})
        except Exception as e:
            LOG(f"Variable change notification for '{key}' failed: {e}")

    def __getitem__(self, key: str) -> Optional[str]:
        return self.get(key)

    def __setitem__(self, key: str, value: Optional[str]) -> None:
        self.set(key, value)

    def __contains__(self, key: object) -> bool:
        with self._lock.read():
            return key in self._vars

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._vars)


DYNAMIC_GLOBALS: Final[dict[str, DynamicKind]] = {
    "date": DynamicKind.CURRENT_DATE,
    "datetime": DynamicKind.CURRENT_DATETIME,
    "time": DynamicKind.CURRENT_TIME,
}


class GlobalVariables(VariableStore):
    """The game-wide store, with `date`, `datetime` and `time` computed."""

    def __init__(
        self, events: Optional[Events] = None, clock: Optional[Clock] = None
    ) -> None:
        super().__init__(
            event_key=appsettings.variable_changed_event, events=events, clock=clock
        )

    def add_dynamics(self) -> None:
        for key, kind in DYNAMIC_GLOBALS.items():
            self.add_dynamic(key, kind)
