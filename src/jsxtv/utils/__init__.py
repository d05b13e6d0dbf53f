"""Shared utilities for jsxtv."""
