"""Async support: AsyncResult and order-preserving concurrent gathering."""

from fieldcheck.async_.itertools import async_gather_results
from fieldcheck.async_.result import AsyncResult

__all__ = ['AsyncResult', 'async_gather_results']
