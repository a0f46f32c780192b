"""
Domain layer: sync events, their state machine and domain errors.
"""
