"""Shared infrastructure for the tridecco package."""
