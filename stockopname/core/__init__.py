"""Core domain layer - entities, interfaces, services and exceptions."""

from stockopname.core import entities, exceptions, interfaces

__all__ = ["entities", "interfaces", "exceptions"]
