"""Core wiring: configuration, lifespan, exception handlers, constants."""
