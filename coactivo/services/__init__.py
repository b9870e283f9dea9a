"""
Service layer: collaborators, text transforms and the case processor.
"""
