"""Shared utilities: exceptions, logging, validation and JSON parsing."""
