"""Core — Document store, requests, errors and logging."""
