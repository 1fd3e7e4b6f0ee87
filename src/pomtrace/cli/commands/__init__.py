"""pomtrace CLI commands."""
