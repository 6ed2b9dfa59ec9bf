"""TransDesk - multilingual content editing core for a blog admin console."""

__version__ = "0.1.0"
