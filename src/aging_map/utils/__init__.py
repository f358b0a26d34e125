"""Shared utilities: errors, configuration and logging setup."""
