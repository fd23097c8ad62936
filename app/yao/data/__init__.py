"""Bundled data files for yao."""
