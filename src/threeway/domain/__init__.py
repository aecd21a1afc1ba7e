"""Domain layer — Order, comparison capabilities, and the Pair composite.

This layer depends only on stdlib and pydantic.
It must never import from services, output, commands, or config.
"""
