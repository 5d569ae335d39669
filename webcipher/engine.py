import logging

from .ciphers import CIPHERS, DESCRIPTIONS, ENCRYPT, MODES
from .errors import UnrecognizedAlgorithm

logger = logging.getLogger(__name__)

ALGORITHMS = tuple(CIPHERS)

__all__ = ['ALGORITHMS', 'DESCRIPTIONS', 'normalize_mode', 'transform']


def normalize_mode(mode):
    value = (mode or ENCRYPT).strip().lower()
    if value not in MODES:
        raise ValueError('Unsupported mode: %s' % mode)
    return value


def transform(mode, algorithm, text, key=''):
    """Run ``algorithm`` over ``text`` and return the result as a string.

    Never raises: an unknown algorithm gives ``"Unrecognized algorithm."`` and
    any unexpected failure inside a cipher gives ``"Error: <message>"``.
    """
    try:
        run = CIPHERS.get(algorithm)
        if run is None:
            logger.warning('Unrecognized algorithm %r', algorithm)
            return str(UnrecognizedAlgorithm())
        mode = normalize_mode(mode)
        logger.debug('%s %s: %d chars, key %d chars', algorithm, mode, len(text or ''), len(key or ''))
        return run(mode, text or '', key or '')
    except Exception as e:
        logger.exception('%s %s failed', algorithm, mode)
        return 'Error: %s' % e
