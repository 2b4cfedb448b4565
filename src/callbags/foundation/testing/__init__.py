"""Testing helpers for pipelines: a recording sink and controllable sources."""

from .recorder import Received, SignalRecorder
from .sources import ManualSource, ProbeSource, Subject

__all__ = ["SignalRecorder", "Received", "ProbeSource", "ManualSource", "Subject"]
