"""
Primality Oracle

Miller-Rabin olasılıksal asallık testi. Her çağrıda bağımsız rastgele
tanıklar seçilir; yanlış "asal" cevabı olasılığı en fazla 4^-confidence.

Kullanım:
    is_probably_prime(97, 20)   # True
    is_probably_prime(91, 20)   # False (7 * 13)
"""

import random

DEFAULT_CONFIDENCE = 20

# Hızlı yol: küçük asallarla bölme denemesi
_SMALL_PRIMES = (3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47)

# Worker process'leri aynı seed'i paylaşmasın diye OS kaynağı kullanılır
_rng = random.SystemRandom()


def is_probably_prime(n: int, confidence: int = DEFAULT_CONFIDENCE) -> bool:
    """
    n olasılıkla asal mı?

    Args:
        n: Test edilecek tamsayı
        confidence: Bağımsız Miller-Rabin turu sayısı (>= 1)

    Returns:
        bool: False ise kesin bileşik, True ise olasılıkla asal

    Raises:
        ValueError: confidence < 1 ise
    """
    if confidence < 1:
        raise ValueError("confidence en az 1 olmalı")

    if n < 2:
        return False
    if n in (2, 3):
        return True
    if n % 2 == 0:
        return False

    for p in _SMALL_PRIMES:
        if n == p:
            return True
        if n % p == 0:
            return False

    # n - 1 = d * 2^s, d tek
    d, s = n - 1, 0
    while d % 2 == 0:
        d //= 2
        s += 1

    for _ in range(confidence):
        a = _rng.randrange(2, n - 1)
        x = pow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(s - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False  # a bir bileşiklik tanığı

    return True
