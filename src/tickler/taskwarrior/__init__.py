"""Taskwarrior task store adapter."""
