"""Shared exception classes.

Contains:
- CollaboratorError: Base exception for every external collaborator
  (git, usage API, update registry). The cache manager catches this family
  and falls back to cached or default data.
"""


class CollaboratorError(Exception):
    """Base exception for failures of an external collaborator."""

    pass
