import base64
import hashlib
import re
import string
from functools import wraps

import numpy as np
from Crypto.Cipher import AES, ARC4, DES
from Crypto.Util.Padding import pad, unpad

from .errors import CipherError, InvalidKeyOrInput, InvalidParameter, KeyRequired

ENCRYPT = 'encrypt'
DECRYPT = 'decrypt'
MODES = (ENCRYPT, DECRYPT)

ALPHABET = string.ascii_uppercase
A2I = {c: i for i, c in enumerate(ALPHABET)}

CIPHERS = {}
DESCRIPTIONS = {}

#==Registry==

def register(name, description):
    """Register a cipher under ``name``.

    The wrapped function reports domain failures (``CipherError``) as their
    literal text; anything else propagates to the caller.
    """
    def decorator(func):
        @wraps(func)
        def run(mode, text, key=''):
            try:
                return func(mode, text, key)
            except CipherError as e:
                return str(e)
        CIPHERS[name] = run
        DESCRIPTIONS[name] = description
        return run
    return decorator

#==Utilities==

_INT_PREFIX = re.compile(r'\s*([+-]?[0-9]+)')
_B64_FOREIGN = re.compile(r'[^A-Za-z0-9+/]')


def is_encrypt(mode):
    return mode == ENCRYPT


def is_letter(ch):
    return ch in string.ascii_letters


def parse_int(value, default):
    # leading integer like "12abc" -> 12; anything else falls back
    m = _INT_PREFIX.match(value or '')
    return int(m.group(1)) if m else default


def sanitize_letters(text):
    return ''.join([c for c in text.upper() if 'A' <= c <= 'Z'])


def bytes_to_b64(data):
    return base64.b64encode(data).decode('ascii')


def b64_to_bytes(text):
    return base64.b64decode(''.join(text.split()), validate=True)


def lenient_b64decode(text):
    """Decode base64 the forgiving way: url-safe alphabet, junk characters
    and missing padding are accepted, decoding stops at the first ``=``."""
    s = text.replace('-', '+').replace('_', '/').split('=', 1)[0]
    s = _B64_FOREIGN.sub('', s)
    if len(s) % 4 == 1:
        s = s[:-1]
    return base64.b64decode(s + '=' * (-len(s) % 4))


def xor_bytes(data, key):
    if not data:
        return b''
    buf = np.frombuffer(data, dtype=np.uint8)
    stream = np.resize(np.frombuffer(key, dtype=np.uint8), buf.shape)
    return np.bitwise_xor(buf, stream).tobytes()


def shift_char(ch, k):
    base = ord('A') if ch.isupper() else ord('a')
    return chr((ord(ch) - base + k) % 26 + base)


def shift_text(text, k):
    k %= 26
    return ''.join(shift_char(ch, k) if is_letter(ch) else ch for ch in text)


def mirror_char(ch):
    base = ord('A') if ch.isupper() else ord('a')
    return chr(base + 25 - (ord(ch) - base))


def rail_pattern(length, rails):
    pattern = np.empty(length, dtype=np.intp)
    rail, step = 0, 1
    for i in range(length):
        pattern[i] = rail
        rail += step
        if rail == rails - 1 or rail == 0:
            step = -step
    return pattern

#==Block and stream ciphers==

# NOTE: every call uses an all-zero IV, so equal plaintext and key always give
# equal ciphertext. Known weakness, kept for compatibility with existing output.

def block_cipher(module, secret, mode, text):
    iv = bytes(module.block_size)
    if is_encrypt(mode):
        cipher = module.new(secret, module.MODE_CBC, iv=iv)
        return bytes_to_b64(cipher.encrypt(pad(text.encode('utf-8'), module.block_size)))
    try:
        data = b64_to_bytes(text)
        cipher = module.new(secret, module.MODE_CBC, iv=iv)
        return unpad(cipher.decrypt(data), module.block_size).decode('utf-8')
    except ValueError as e:
        raise InvalidKeyOrInput() from e


@register('AES-256', 'AES (Advanced Encryption Standard), 256-bit key.')
def aes256(mode, text, key):
    secret = hashlib.sha256(key.encode('utf-8')).digest()[:32]
    return block_cipher(AES, secret, mode, text)


@register('DES', 'DES (Data Encryption Standard), legacy 56-bit key.')
def des(mode, text, key):
    secret = hashlib.md5(key.encode('utf-8')).digest()[:8]
    return block_cipher(DES, secret, mode, text)


@register('RC4', 'RC4, stream cipher.')
def rc4(mode, text, key):
    # key scheduling only reads the first 256 bytes
    secret = key.encode('utf-8')[:256]
    if is_encrypt(mode):
        return bytes_to_b64(ARC4.new(secret).encrypt(text.encode('utf-8')))
    try:
        return ARC4.new(secret).decrypt(b64_to_bytes(text)).decode('utf-8')
    except ValueError as e:
        raise InvalidKeyOrInput() from e

#==Encoding==

@register('Base64', 'Base64 encoding (not encryption!).')
def base64_codec(mode, text, key=''):
    if is_encrypt(mode):
        return bytes_to_b64(text.encode('utf-8'))
    return lenient_b64decode(text).decode('utf-8', errors='replace')

#==Classical ciphers==

@register('Caesar', 'Caesar cipher (classic shift).')
def caesar(mode, text, key):
    shift = parse_int(key, 3) % 26
    if not is_encrypt(mode):
        shift = 26 - shift
    return shift_text(text, shift)


@register('Vigenere', 'Vigenère cipher, polyalphabetic.')
def vigenere(mode, text, key):
    key = sanitize_letters(key)
    if not key:
        raise KeyRequired()
    direction = 1 if is_encrypt(mode) else -1
    res = []
    ki = 0
    for ch in text:
        if is_letter(ch):
            base = ord('a') if ch.islower() else ord('A')
            off = (ord(ch) - base) + direction * A2I[key[ki % len(key)]]
            res.append(chr(base + off % 26))
            ki += 1
        else:
            res.append(ch)
    return ''.join(res)


@register('Atbash', 'Atbash cipher (reversal).')
def atbash(mode, text, key=''):
    return ''.join(mirror_char(ch) if is_letter(ch) else ch for ch in text)


@register('ROT13', 'ROT13 (special Caesar, shift 13).')
def rot13(mode, text, key=''):
    return shift_text(text, 13)


@register('XOR', 'XOR, symmetric stream.')
def xor(mode, text, key):
    if not key:
        raise KeyRequired()
    secret = key.encode('utf-8')
    if is_encrypt(mode):
        return bytes_to_b64(xor_bytes(text.encode('utf-8'), secret))
    try:
        return xor_bytes(b64_to_bytes(text), secret).decode('utf-8')
    except ValueError as e:
        raise InvalidKeyOrInput() from e


@register('RailFence', 'Rail Fence (transposition).')
def railfence(mode, text, key):
    rails = parse_int(key, 2)
    if rails < 2:
        raise InvalidParameter()
    # order[j] is the original position of the j-th ciphertext character
    order = np.argsort(rail_pattern(len(text), rails), kind='stable')
    if is_encrypt(mode):
        return ''.join(text[i] for i in order)
    return ''.join(text[j] for j in np.argsort(order, kind='stable'))
