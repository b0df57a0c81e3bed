"""Command layer (dispatch table + handlers) and the process entrypoint."""
