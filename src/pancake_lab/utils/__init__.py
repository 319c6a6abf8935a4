"""Utility modules for Pancake Lab (constants, configuration, validators)."""
