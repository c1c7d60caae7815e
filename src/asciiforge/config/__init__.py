"""Runtime configuration for asciiforge."""
