"""Persistence implementations for gymapp_auth.

This package contains database-specific implementations of the
repository interfaces defined in gymapp_auth.repositories.

Usage:
    from gymapp_auth.persistence.sqlalchemy import (
        AuthBase,
        RefreshTokenModel,
        RefreshTokenRepositorySQLAlchemy,
    )
"""
