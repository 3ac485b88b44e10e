"""Domain layer for the NOC workflow.

Pure business rules: models, the error taxonomy and the transition
engine. Nothing in here imports from application, infrastructure or api.
"""
