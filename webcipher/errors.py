"""Error kinds a cipher can report instead of a result.

Each one renders as the literal string shown to the user, so
``str(exc)`` is the value the engine hands back.
"""


class CipherError(ValueError):
    message = 'Cipher error'

    def __init__(self, message=None):
        super().__init__(message or self.message)


class InvalidKeyOrInput(CipherError):
    message = 'Invalid key or input'


class KeyRequired(CipherError):
    message = 'Key required'


class InvalidParameter(CipherError):
    message = 'Key must be >=2'


class UnrecognizedAlgorithm(CipherError):
    message = 'Unrecognized algorithm.'
