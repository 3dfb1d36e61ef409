"""Stateless HTTP surface over covenant_engine."""
