"""Core infrastructure: configuration, logging, exceptions and DI wiring."""
