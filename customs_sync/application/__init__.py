"""
Application layer: the sync engine services and their collaborator interfaces.
"""
