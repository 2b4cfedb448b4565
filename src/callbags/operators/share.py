"""Multicast: one upstream subscription fanned out to many sinks."""

from __future__ import annotations

from typing import Any

from ..core import DATA, END, START, Signal, Sink, Source, Talkback
from ..foundation.logging import lifecycle_logger


class _Attachment:
    """One downstream sink of a shared source; also that sink's talkback."""
    
    __slots__ = ("_hub", "sink", "detached")
    
    def __init__(self, hub: _Shared, sink: Sink) -> None:
        self._hub, self.sink = hub, sink
        self.detached = False
    
    def __call__(self, kind: Signal | str, payload: Any = None, /) -> None:
        if self.detached:
            return
        if kind == END:
            self.detached = True
            self._hub.detach(self)
        else:
            self._hub.request(kind, payload)


class _Shared:
    """Reference-counted hub behind one ``share(source)`` call."""
    
    __slots__ = ("_source", "_attachments", "_upstream", "_log")
    
    def __init__(self, source: Source) -> None:
        self._source = source
        self._attachments: list[_Attachment] = []
        self._upstream: Talkback | None = None
        self._log = lifecycle_logger("share")
    
    def __call__(self, kind: Signal | str, sink: Any = None, /) -> None:
        if kind != START:
            return
        attachment = _Attachment(self, sink)
        self._attachments.append(attachment)
        if len(self._attachments) == 1:
            if self._log:
                self._log.debug("subscribing upstream")
            self._source(START, self._upstream_sink(attachment))
        else:
            sink(START, attachment)
    
    def _upstream_sink(self, first: _Attachment) -> Sink:
        def receive(kind: Signal | str, payload: Any = None, /) -> None:
            if kind == START:
                self._upstream = payload
                first.sink(START, first)
                return
            self._broadcast(kind, payload)
        return receive
    
    def _broadcast(self, kind: Signal | str, payload: Any) -> None:
        # Iterate a copy: sinks may detach (or attach) while being delivered to
        for attachment in list(self._attachments):
            if not attachment.detached:
                attachment.sink(kind, payload)
        if kind == END:
            if self._log:
                self._log.debug("upstream ended", sinks=len(self._attachments))
            for attachment in self._attachments:
                attachment.detached = True
            self._attachments = []
            self._upstream = None
    
    def request(self, kind: Signal | str, payload: Any) -> None:
        if self._upstream is not None:
            self._upstream(kind, payload)
    
    def detach(self, attachment: _Attachment) -> None:
        if attachment in self._attachments:
            self._attachments.remove(attachment)
        if not self._attachments and self._upstream is not None:
            if self._log:
                self._log.debug("last sink detached, ending upstream")
            upstream, self._upstream = self._upstream, None
            upstream(END)


def share(source: Source) -> Source:
    """Share one subscription to ``source`` between any number of sinks.
    
    The first sink to attach starts the upstream; later ones are greeted
    straight away and receive values from that point on. Upstream is ended
    when the last sink detaches, and a sink attaching after that starts a
    fresh subscription. Works on pull and push sources; with pull sources
    every sink's request is forwarded upstream.
    """
    return _Shared(source)
