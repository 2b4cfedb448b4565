"""Foundation: configuration, errors, logging and test helpers."""
