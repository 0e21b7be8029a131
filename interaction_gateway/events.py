"""Named-event publishing between the gateway and application handlers."""
import asyncio
import inspect
import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional, Set

logger = logging.getLogger(__name__)

Handler = Callable[..., Any]


class EventEmitter:
    """
    Minimal event emitter.

    Coroutine handlers are scheduled as tasks so `emit` never waits for them.
    Plain callables run inline. Handler failures are logged, not re-raised.
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[Handler]] = defaultdict(list)
        self._tasks: Set[asyncio.Task] = set()

    def on(self, event: str, handler: Optional[Handler] = None):
        """Subscribe `handler` to `event`; usable as a decorator."""
        if handler is None:
            def decorator(func: Handler) -> Handler:
                self._handlers[event].append(func)
                return func

            return decorator
        self._handlers[event].append(handler)
        return handler

    def once(self, event: str, handler: Handler) -> Handler:
        def wrapper(*args: Any) -> Any:
            self.off(event, wrapper)
            return handler(*args)

        self._handlers[event].append(wrapper)
        return wrapper

    def off(self, event: str, handler: Handler) -> None:
        self._handlers[event] = [h for h in self._handlers[event] if h is not handler]

    def listener_count(self, event: str) -> int:
        return len(self._handlers.get(event, ()))

    def emit(self, event: str, *args: Any) -> List[asyncio.Task]:
        """Call every handler of `event`; return the tasks of coroutine handlers."""
        tasks: List[asyncio.Task] = []
        for handler in list(self._handlers.get(event, ())):
            try:
                result = handler(*args)
            except Exception:
                logger.exception("Error in %s handler %r", event, handler)
                continue
            if inspect.isawaitable(result):
                task = asyncio.ensure_future(result)
                task.add_done_callback(self._make_done_callback(event))
                self._tasks.add(task)
                tasks.append(task)
        return tasks

    def _make_done_callback(self, event: str) -> Callable[[asyncio.Task], None]:
        def done(task: asyncio.Task) -> None:
            self._tasks.discard(task)
            if task.cancelled():
                return
            exc = task.exception()
            if exc is not None:
                logger.error("Error in %s handler", event, exc_info=exc)

        return done
