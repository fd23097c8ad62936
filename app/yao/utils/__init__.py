"""Utility modules for yao: console formatting and subprocess execution."""
