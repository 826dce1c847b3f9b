"""Shared schemas for pagemodel."""

from pagemodel.schemas.element import ElementInfo

__all__ = ["ElementInfo"]
