"""Application layer - use case orchestration.

Commands carry intent; services execute it against domain protocols and
return Result types. No infrastructure imports.
"""
