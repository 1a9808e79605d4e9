"""Filesystem and console helpers."""
