"""CLI command modules."""

from .chat import ask, chat, teach
from .kb import kb
from .review import review
from .serve import serve

__all__ = ["chat", "ask", "teach", "kb", "review", "serve"]
