"""Kernel – error hierarchy and security principal."""
