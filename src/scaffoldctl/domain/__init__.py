"""Domain layer: pure rules for names, token rewriting, and generation phases.

Nothing in this package touches the filesystem.
"""
