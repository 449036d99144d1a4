from __future__ import annotations
from typing import Sequence

from midi.codec import BlockSizeError, check_byte
from midi.fields import HeaderMapper


class HeaderBuffer:
    """In-memory copy of one header block as last read from the sampler.

    Partial updates are spliced in at their offset, so the buffer always
    mirrors what the sampler holds after the same patch.  Tracks dirty state
    so callers know when a full write is needed.
    """

    def __init__(self, size: int, data: bytes | bytearray | None = None) -> None:
        self._size = size
        self._data = bytearray(size)
        self._dirty = False
        if data is not None:
            self.load(data)

    @classmethod
    def for_mapper(cls, mapper: HeaderMapper, data: bytes | None = None) -> HeaderBuffer:
        return cls(mapper.block_size, data)

    @property
    def size(self) -> int:
        return self._size

    @property
    def dirty(self) -> bool:
        return self._dirty

    def mark_clean(self) -> None:
        self._dirty = False

    def load(self, data: Sequence[int]) -> None:
        if len(data) != self._size:
            raise BlockSizeError(f"Expected {self._size} bytes, got {len(data)}")
        self._data = bytearray(data)
        self._dirty = False

    def to_bytes(self) -> bytes:
        return bytes(self._data)

    def _check_range(self, offset: int, length: int = 1) -> None:
        if offset < 0 or offset + length > self._size:
            raise IndexError(
                f"Offset {offset} (+{length}) out of range (size={self._size})"
            )

    def get_byte(self, offset: int) -> int:
        self._check_range(offset)
        return self._data[offset]

    def set_byte(self, offset: int, value: int) -> None:
        self._check_range(offset)
        value = check_byte(value)
        if self._data[offset] != value:
            self._data[offset] = value
            self._dirty = True

    def splice(self, offset: int, patch: Sequence[int]) -> None:
        """Overwrite ``len(patch)`` bytes starting at ``offset``."""
        self._check_range(offset, len(patch))
        patch = bytes(patch)
        if self._data[offset:offset + len(patch)] != patch:
            self._data[offset:offset + len(patch)] = patch
            self._dirty = True

    # -- mapper-aware access --

    def apply(self, mapper: HeaderMapper, index: int, value) -> bytes:
        """Encode one field with ``mapper``, splice it in and return the patch."""
        patch = mapper.encode_partial(index, value)
        self.splice(index, patch)
        return patch

    def apply_name(self, mapper: HeaderMapper, index: int, name: str) -> bytes:
        patch = mapper.encode_name(index, name)
        self.splice(index, patch)
        return patch

    def decode(self, mapper: HeaderMapper):
        return mapper.decode(self._data)

    def store(self, mapper: HeaderMapper, record) -> None:
        """Replace the whole block with ``record`` encoded by ``mapper``."""
        encoded = mapper.encode(record)
        if len(encoded) != self._size:
            raise BlockSizeError(f"Expected {self._size} bytes, got {len(encoded)}")
        if encoded != self._data:
            self._data = bytearray(encoded)
            self._dirty = True
