"""Ortak test yardımcıları"""

import pytest

PRIMES_BELOW_100 = [
    2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47,
    53, 59, 61, 67, 71, 73, 79, 83, 89, 97,
]

PRIMES_98_TO_198 = [
    101, 103, 107, 109, 113, 127, 131, 137, 139, 149,
    151, 157, 163, 167, 173, 179, 181, 191, 193, 197,
]


def reference_primes(lo, hi):
    """Deneme bölmesi ile [lo, hi) aralığındaki asallar"""
    result = []
    for n in range(max(lo, 2), hi):
        if all(n % d for d in range(2, int(n ** 0.5) + 1)):
            result.append(n)
    return result


class ListSink:
    """put() çağrılarını kaydeden basit sink"""

    def __init__(self):
        self.items = []

    def put(self, item):
        self.items.append(item)

    @property
    def primes(self):
        return [i for i in self.items if isinstance(i, int)]


@pytest.fixture
def list_sink():
    return ListSink()
