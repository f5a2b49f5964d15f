from .context import DispatchContext, HandlerOptions, controlfield_source, datafield_source
from .leader import interpret_leader
from .walker import RecordWalker, convert

__all__ = [
    "DispatchContext",
    "HandlerOptions",
    "RecordWalker",
    "controlfield_source",
    "convert",
    "datafield_source",
    "interpret_leader",
]
