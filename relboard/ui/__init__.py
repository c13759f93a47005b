"""Terminal front end: key decoding, terminal session and rendering."""

from .keys import decode_key
from .render import render_view
from .terminal import TerminalSession

__all__ = ["TerminalSession", "decode_key", "render_view"]
