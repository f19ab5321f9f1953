"""Infrastructure layer — template location, tree cloning, phase state on disk.

This layer may use the pure rules in the domain layer (token rewriting,
blueprints). It must never import from services, commands, or output.
"""
