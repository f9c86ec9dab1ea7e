"""Opinionated GTD workflows on top of Taskwarrior."""

__version__ = "0.1.0"
