"""Core models and errors for optiongate."""
