"""Artifact schemas and output path helpers."""
