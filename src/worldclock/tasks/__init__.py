"""Background and one-shot jobs."""
