"""Decorators for building validators."""

from fieldcheck.decorators.rule import rule

__all__ = ['rule']
