"""Shortcode generation utility

This module proposes candidate shortcodes. It never persists anything:
uniqueness is decided by the atomic insert of the data store, and the
shorten service retries on collisions.

Two strategies are available, selected by `max_length`:

    - random (max_length > 0):
        every symbol drawn independently with `secrets`; fixed length,
        not enumerable.
    - sequence (max_length unset or non-positive):
        the next value of a process-wide, monotonically increasing source
        scrambled by a salted affine permutation. The salt is combined with
        a random per-process nonce, so workers sharing a configured salt
        and overlapping counters still draw from unrelated permutations.
        Length grows with the source; a single process never repeats a code.

Functions:
    generate_shortcode(counter, salt='default_salt', length=7, mult=1315423911, alphabet=ALPHABET):
        Deterministically permute a counter into a fixed-length code.

Classes:
    ShortcodeGenerator:
        Configured generator used by the shorten service.

Example:
    >>> from shorter.utils import generate_shortcode
    >>> generate_shortcode(12345, salt='my_secret')
    'Gh71WPT'

    >>> generator = ShortcodeGenerator(max_length=6)
    >>> len(generator.generate())
    6
"""

import itertools
import math
import secrets
import time

import xxhash

from shorter.constants import Defaults
from shorter.exceptions import BadConfigurationError


ALPHABET = Defaults.ALPHABET
BASE = len(ALPHABET)  # 26 lowercase + 26 uppercase + 10 digits
DEFAULT_MULT = 1315423911

# Process-wide source for the sequence strategy. next() on itertools.count is
# atomic, so concurrent requests never draw the same value.
_SEQUENCE = itertools.count(time.time_ns() // 1_000_000)


def validate_alphabet(alphabet: str) -> str:
    """Return `alphabet` if it is a usable symbol set

    Raises:
        BadConfigurationError:
            If the alphabet is not a string, has fewer than 2 symbols or repeats a symbol.
    """
    if not isinstance(alphabet, str):
        raise BadConfigurationError(f'Alphabet must be of type string (given type: {type(alphabet)}).')
    if len(set(alphabet)) < 2:
        raise BadConfigurationError(f'Alphabet must contain at least 2 distinct symbols (given value: {alphabet!r}).')
    if len(set(alphabet)) != len(alphabet):
        raise BadConfigurationError(f'Alphabet must not repeat symbols (given value: {alphabet!r}).')
    return alphabet


def coprime_multiplier(base: int, mult: int = DEFAULT_MULT) -> int:
    """Return the smallest multiplier >= `mult` that is coprime with `base`

    A multiplier coprime with `base` is coprime with every power of `base`,
    which keeps the affine permutation a bijection for any code length.
    """
    while math.gcd(mult, base) != 1:
        mult += 1
    return mult


def generate_shortcode(
    counter: int,
    salt: str = 'default_salt',
    length: int = 7,
    mult: int = DEFAULT_MULT,
    alphabet: str = ALPHABET,
) -> str:
    """Generate a short, deterministic code from a counter and salt.

    The counter is salted and wrapped in modulo len(alphabet)^length to
    ensure fixed-length output, through a **multiplicative permutation**
    that guarantees:
    - 1:1 mapping (bijective) for counter < len(alphabet)^length
    - Deterministic output
    - No visible sequential patterns

    Args:
        counter (int):
            Non-negative integer identifying the code.

        salt (str, optional):
            Secret string used to randomize the output space.

        length (int, optional):
            Length of the resulting code. Defaults to 7.

        mult (int, optional):
            Multiplicative factor for the permutation.
            Must be coprime with len(alphabet)^length.

        alphabet (str, optional):
            Symbols the code is made of. Defaults to base62.

    Returns:
        str: A code of exactly `length` symbols drawn from `alphabet`.

    Example:
        >>> generate_shortcode(12345, salt='my_secret', length=7)
        'Gh71WPT'

    NOTE:
        - Collisions only occur after the counter wraps around the modulo space.
        - The output is not trivially predictable without knowledge of the salt
          and permutation parameters (this is obfuscation, not encryption).
    """
    if not isinstance(counter, int) or isinstance(counter, bool):
        raise TypeError(f'Counter must be of type integer (given type: {type(counter)}).')
    if counter < 0:
        raise ValueError(f'Counter must be a non-negative integer (given value: {counter}).')
    if not isinstance(salt, str):
        raise TypeError(f'Salt must be of type string (given type: {type(salt)}).')
    if not salt:
        raise ValueError(f'Salt must be a non-empty string (given value: {salt}).')
    if not isinstance(length, int) or length < 1:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')

    base = len(alphabet)
    modulo_space = base**length
    if math.gcd(mult, modulo_space) != 1:
        raise ValueError(f'Multiplicative factor must be coprime with mod ({modulo_space}) (given value: mult={mult}).')

    # Affine (multiplicative + additive) permutation over the fixed modulo
    # space: scrambles sequential counters while preserving a 1:1 mapping.
    salt_hash = xxhash.xxh64_intdigest(salt) % modulo_space
    permuted = (counter * mult + salt_hash) % modulo_space

    # Most significant digit first, padded to a fixed length
    return ''.join(reversed([alphabet[(permuted // base**i) % base] for i in range(length)]))


class ShortcodeGenerator:
    """Propose candidate shortcodes from a configured alphabet and length bound

    Attributes:
        alphabet (str):
            Symbols codes are made of.
        max_length (int | None):
            Fixed code length, or None for variable length sequence codes.
        salt (str):
            Configured secret used by the sequence strategy, or a random
            one when none is configured.
        nonce (str):
            Random value drawn once per generator. It is appended to the
            salt, so two processes drawing the same sequence value propose
            different codes even when they share the configured salt.

    Example:
        >>> code = ShortcodeGenerator(alphabet='ab', max_length=4).generate()
        >>> len(code), set(code) <= {'a', 'b'}
        (4, True)
    """

    def __init__(
        self,
        alphabet: str | None = None,
        max_length: int | None = None,
        salt: str | None = None,
        sequence: itertools.count | None = None,
    ):
        self.alphabet = validate_alphabet(alphabet or ALPHABET)
        self.max_length = max_length if max_length is not None and max_length > 0 else None
        if self.max_length is not None and self.max_length > Defaults.MAX_CODE_LENGTH:
            raise BadConfigurationError(f'max_length must be at most {Defaults.MAX_CODE_LENGTH} (given value: {max_length}).')
        self.salt = salt or secrets.token_hex(8)
        self.nonce = secrets.token_hex(8)
        self._sequence = sequence if sequence is not None else _SEQUENCE
        self._mult = coprime_multiplier(len(self.alphabet))

    @property
    def strategy(self) -> str:
        return 'random' if self.max_length is not None else 'sequence'

    def generate(self) -> str:
        """Return a candidate shortcode; has no side effects beyond drawing the next sequence value"""
        if self.max_length is not None:
            return ''.join(secrets.choice(self.alphabet) for _ in range(self.max_length))

        counter = next(self._sequence)
        return generate_shortcode(counter, salt=f'{self.salt}:{self.nonce}', length=self.length_for(counter), mult=self._mult, alphabet=self.alphabet)

    def length_for(self, counter: int) -> int:
        """Smallest code length whose modulo space holds `counter`"""
        base = len(self.alphabet)
        length = 1
        while base**length <= counter:
            length += 1
        return length
