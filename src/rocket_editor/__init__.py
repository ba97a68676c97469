"""Terminal multi-buffer text editor with a modal popup overlay."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "editor",
    "keymaps",
    "modes",
    "popups",
    "runtime",
    "styling",
]

__version__ = "0.1.0"
