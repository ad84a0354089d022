"""tracescope package root."""

from tracescope.exceptions import NeverRaise, NeverThrown
from tracescope.invariants import never
from tracescope.analysis.qualname import resolve_qualified_name
from tracescope.frames import StackFrame, parse_stack_frames, qualified_function_name

__all__ = [
    "__version__",
    "NeverRaise",
    "NeverThrown",
    "StackFrame",
    "never",
    "parse_stack_frames",
    "qualified_function_name",
    "resolve_qualified_name",
]

__version__ = "0.1.0"
