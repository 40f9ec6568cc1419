"""
Feature modules live under this package.

Each module owns its models and service; persistence goes through the shared
PersistenceContext and the generic Repository.
"""
