"""Cross-cutting pieces: configuration, logging, exceptions, protocols."""
