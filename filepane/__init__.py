"""Model of a terminal file manager: listings, history, key bindings, command parsing and configuration."""

__version__ = "0.1.0"