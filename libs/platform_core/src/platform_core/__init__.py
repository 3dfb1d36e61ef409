"""Shared platform utilities: JSON narrowing, logging, errors, config, health."""
