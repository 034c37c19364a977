"""Shared helpers: errors, logging, validation, pagination."""
