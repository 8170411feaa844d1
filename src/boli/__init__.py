"""Boli contribution ledger API."""
