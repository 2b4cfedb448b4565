"""callbags - Composable pull and push streams from one tiny protocol.

A callbag is a function ``(kind, payload=None) -> None``. Sources, sinks and
talkbacks all share that shape; operators are functions from source to
source. Pull sources only send data when asked, push sources send whenever
they like, and both compose with the same operators, with backpressure and
cancellation built into the handshake.

Quick Start:
    >>> from callbags import pipe, range, filter, map, for_each
    >>>
    >>> pipe(
    ...     range(1, 10),
    ...     filter(lambda x: x % 2 == 0),
    ...     map(lambda x: x * x),
    ...     for_each(print),
    ... )
    4
    16
    36
    64
    100

Iteration:
    >>> from callbags import from_array, take, to_iter
    >>> list(to_iter(take(2)(from_array(["a", "b", "c"]))))
    ['a', 'b']

Higher-order streams:
    >>> from callbags import concat, flatten, share
    >>> list(to_iter(concat(range(1, 2), range(3, 4))))
    [1, 2, 3, 4]

Observables:
    >>> from callbags import from_obs
    >>> pipe(from_obs(subject), map(str.upper), for_each(print))

Diagnostics:
    >>> from callbags import configure_logging, log_signals
    >>> configure_logging(level="DEBUG")
    >>> pipe(range(1, 3), log_signals("numbers"), for_each(print))
"""

from __future__ import annotations

__version__ = "0.1.0"

# Protocol
from .core import (
    COMPLETED,
    DATA,
    END,
    START,
    Callbag,
    Completed,
    Failed,
    Handshake,
    Operator,
    PairState,
    PullLoop,
    Signal,
    Sink,
    Source,
    Talkback,
    Termination,
    pull_source,
)

# Errors
from .foundation.errors import (
    CallbagError,
    CallbagException,
    ErrorCode,
    InvalidArgumentError,
    UpstreamError,
)

# Config & logging
from .foundation.config import CallbagsSettings, clear_settings_cache, get_settings
from .foundation.logging import configure_logging, get_logger, log_context

# Sources
from .sources import (
    Disposable,
    Subscribable,
    from_array,
    from_iter,
    from_iterable,
    from_obs,
    range,  # noqa: A004
)

# Sinks
from .sinks import Subscription, for_each, to_async_iter, to_iter

# Operators
from .operators import (  # noqa: A004
    concat,
    filter,
    flatten,
    guard,
    log_signals,
    map,
    scan,
    share,
    skip,
    take,
)

# Composition
from .pipeline import pipe, pipe_values

__all__ = [
    "__version__",
    # Protocol
    "Signal", "START", "DATA", "END",
    "Callbag", "Source", "Sink", "Talkback", "Operator",
    "Termination", "Completed", "Failed", "COMPLETED",
    "Handshake", "PairState", "PullLoop", "pull_source",
    # Errors
    "ErrorCode", "CallbagError", "CallbagException", "InvalidArgumentError", "UpstreamError",
    # Config & logging
    "CallbagsSettings", "get_settings", "clear_settings_cache",
    "configure_logging", "get_logger", "log_context",
    # Sources
    "range", "from_array", "from_iter", "from_iterable", "from_obs",
    "Subscribable", "Disposable",
    # Sinks
    "for_each", "Subscription", "to_iter", "to_async_iter",
    # Operators
    "map", "scan", "filter", "skip", "take", "concat", "flatten", "share",
    "log_signals", "guard",
    # Composition
    "pipe", "pipe_values",
]
