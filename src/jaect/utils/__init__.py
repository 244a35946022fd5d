"""Shared utilities for jaect."""
