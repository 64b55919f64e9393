"""Shared utilities for offcycle."""
