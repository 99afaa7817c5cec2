"""Core building blocks: errors, cache and transport executors."""
