"""Reporters and front-end adapters for scan results."""
