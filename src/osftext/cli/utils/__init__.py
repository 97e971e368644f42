"""Shared helpers for osftext CLI commands."""
