"""Check execution against installed releases."""
