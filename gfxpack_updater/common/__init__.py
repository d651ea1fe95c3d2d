"""Shared constants, settings, errors and logging for the updater."""
