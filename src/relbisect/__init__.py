"""relbisect - find the first bad release of a project."""
