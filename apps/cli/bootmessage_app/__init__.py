"""Boot message command-line application."""
