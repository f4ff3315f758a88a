"""An interactive shell with pipes, redirections, here-documents, expansion and builtins."""

__version__ = "0.1.0"