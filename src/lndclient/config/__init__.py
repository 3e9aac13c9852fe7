"""Bootstrap config model, settings and logging."""
