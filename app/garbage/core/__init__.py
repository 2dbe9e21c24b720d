"""Core infrastructure: XDG paths, configuration, theme and run context."""
