"""
Checkpoint Resolver

Run başında taramanın nereden devam edeceğini belirler.
Store boşsa ORIGIN (0), değilse son kaydedilen asal + 1.
"""

import logging

from ..core.exceptions import CheckpointError, CheckpointReadFailure
from .checkpoint_store import CheckpointStore

# Tanım kümesinin başlangıcı; 2 worker normalizasyonu ile üretilir
ORIGIN = 0


def resolve_start(store: CheckpointStore) -> int:
    """
    Devam noktasını hesaplar

    Args:
        store: Checkpoint store

    Returns:
        int: Taramanın başlayacağı değer

    Raises:
        CheckpointCorrupt: Son kayıt çözümlenemiyorsa (varsayılan değere düşülmez)
        CheckpointReadFailure: Store okunamıyorsa
    """
    logger = logging.getLogger("resolver")
    try:
        last = store.read_last()
    except CheckpointError:
        raise
    except OSError as e:
        raise CheckpointReadFailure(f"Checkpoint okunamadı: {e}") from e

    if last is None:
        logger.info(f"Önceki kayıt yok, tarama {ORIGIN}'dan başlıyor")
        return ORIGIN

    logger.info(f"Son kayıt {last}, tarama {last + 1}'den devam ediyor")
    return last + 1
