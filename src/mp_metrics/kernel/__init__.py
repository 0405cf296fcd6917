"""Kernel – shared error hierarchy."""
