"""Primality oracle"""

from .primality import is_probably_prime, DEFAULT_CONFIDENCE

__all__ = ['is_probably_prime', 'DEFAULT_CONFIDENCE']
