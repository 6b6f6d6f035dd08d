"""Terminal screen model: cells, draw state, framebuffer and control-function dispatch."""

__version__ = "0.1.0"

__all__ = [
    "actions",
    "cells",
    "drawstate",
    "framebuffer",
    "dispatcher",
    "functions",
    "userinput",
]