"""Shared error kind constants for import error reporting."""


class ErrorKind:
    VALIDATION = "validation"
    REFERENCE_CREATION = "reference_creation"
    PERSISTENCE = "persistence"
