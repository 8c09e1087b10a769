"""Run recursive tree walks on a thread with a large stack.

Parsing recurses once per nesting level and evaluation several times per
PaneerLang call, so the interpreter's default recursion limit would stop
programs long before the host stack is actually exhausted.
"""

import sys
import threading
from typing import Any, Callable

RECURSION_LIMIT = 100_000
STACK_SIZE = 512 * 1024 * 1024

_state = threading.local()


def deep_stack(func: Callable[..., Any], *args: Any) -> Any:
    """Call `func(*args)` on a worker thread sized for deep recursion.

    The result is returned in the calling thread and any exception raised by
    `func` is re-raised there. Calls made from inside a worker run inline.
    """
    if getattr(_state, 'active', False):
        return func(*args)

    outcome = {}

    def target():
        _state.active = True
        try:
            outcome['value'] = func(*args)
        except BaseException as e:
            outcome['error'] = e

    old_limit = sys.getrecursionlimit()
    old_size = threading.stack_size(STACK_SIZE)
    sys.setrecursionlimit(max(old_limit, RECURSION_LIMIT))
    try:
        worker = threading.Thread(target=target, name='paneer-worker')
        worker.start()
        worker.join()
    finally:
        threading.stack_size(old_size)
        sys.setrecursionlimit(old_limit)
    if 'error' in outcome:
        raise outcome['error']
    return outcome.get('value')
