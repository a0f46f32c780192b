"""
Infrastructure layer: transports to the customs system and monitoring.
"""
