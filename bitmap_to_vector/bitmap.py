# =============================================================================
# Packed black/white bitmaps
# =============================================================================
# A Bitmap stores one bit per pixel in 64-bit words. Scanline y occupies
# map[y, 0:dy]; the leftmost pixel of a word is its most significant bit.
# Bits past the right edge (padding) are not part of the image and must be
# zeroed with clear_excess_padding() before word-wise scans.
# =============================================================================

from typing import Callable

import numpy as np

from .errors import BitmapSizeError, UnsupportedFormatError

BM_WORDSIZE = 8                       # bytes per word
BM_WORDBITS = 8 * BM_WORDSIZE         # bits per word
BM_HIBIT = 1 << (BM_WORDBITS - 1)
BM_ALLBITS = (1 << BM_WORDBITS) - 1

WORD_ALL = np.uint64(BM_ALLBITS)
_MASKS = tuple(np.uint64(BM_HIBIT >> i) for i in range(BM_WORDBITS))

_MAX_BYTES = np.iinfo(np.intp).max


def bm_mask(x: int) -> np.uint64:
    """Word mask selecting pixel column x within its word."""
    return _MASKS[x & (BM_WORDBITS - 1)]


def getsize(dy: int, h: int) -> int:
    """
    Size in bytes of the data area of a bitmap with dy words per line and
    h lines. Raises BitmapSizeError if it is not addressable.
    """
    size = abs(dy) * h * BM_WORDSIZE
    if size < 0 or size > _MAX_BYTES:
        raise BitmapSizeError("Bitmap size out of bounds")
    return size


class Bitmap:
    """
    A packed 2-D boolean grid; set bits are black pixels.

    Checked accessors (get, set, clear, toggle, put) treat coordinates
    outside the bitmap as white and ignore writes to them. The unchecked
    variants (uget, uset, uclear, utoggle, uput) skip the range test; the
    caller must guarantee 0 <= x < w and 0 <= y < h.
    """

    def __init__(self, w: int, h: int):
        if w < 0 or h < 0:
            raise BitmapSizeError(f"Invalid bitmap size {w}x{h}")
        dy = 0 if w == 0 else (w - 1) // BM_WORDBITS + 1
        getsize(dy, h)
        try:
            self.map = np.zeros((h, dy), dtype=np.uint64)
        except (MemoryError, ValueError) as exc:
            raise BitmapSizeError(f"Cannot allocate a {w}x{h} bitmap") from exc
        self.w = w
        self.h = h
        self.dy = dy

    @classmethod
    def create(cls, w: int, h: int) -> "Bitmap":
        """Create an all-white bitmap."""
        return cls(w, h)

    # -------------------------------------------------------------------------
    # Adapters
    # -------------------------------------------------------------------------

    @classmethod
    def from_array(cls, data, blacklevel: float = 0.5) -> "Bitmap":
        """
        Build a bitmap from array-like image data.

        Args:
            data: One of
                  - 2D boolean numpy array, True meaning black
                  - 2D numeric array of luminance values in 0..255
                  - PIL Image (converted to grayscale)
            blacklevel: Pixels darker than 255 * blacklevel become black.

        Row r of the input becomes bitmap line y = r, so traced coordinates
        are in the same frame as the input array.
        """
        # Handle PIL Image objects
        if hasattr(data, "mode") and hasattr(data, "convert"):
            if data.mode != "L":
                data = data.convert("L")
            data = np.asarray(data)

        data = np.asarray(data)
        if data.ndim != 2:
            raise UnsupportedFormatError(
                f"Expected a 2D array, got shape {data.shape}"
            )
        if data.dtype == np.bool_:
            black = data
        elif np.issubdtype(data.dtype, np.integer) or np.issubdtype(
            data.dtype, np.floating
        ):
            black = data < (255 * blacklevel)
        else:
            raise UnsupportedFormatError(f"Unsupported pixel type {data.dtype}")

        h, w = black.shape
        bm = cls(w, h)
        if w and h:
            padded = np.zeros((h, bm.dy * BM_WORDBITS), dtype=bool)
            padded[:, :w] = black
            packed = np.packbits(padded, axis=1)
            bm.map[:] = packed.view(">u8")
        return bm

    @classmethod
    def from_predicate(cls, w: int, h: int, is_black: Callable[[int, int], bool]) -> "Bitmap":
        """Build a bitmap by asking is_black(x, y) for every pixel."""
        bm = cls(w, h)
        for y in range(h):
            for x in range(w):
                if is_black(x, y):
                    bm.uset(x, y)
        return bm

    def to_array(self) -> np.ndarray:
        """Unpack into an (h, w) boolean array, True meaning black."""
        if not self.w or not self.h:
            return np.zeros((self.h, self.w), dtype=bool)
        raw = self.map.astype(">u8").view(np.uint8)
        return np.unpackbits(raw, axis=1)[:, : self.w].astype(bool)

    # -------------------------------------------------------------------------
    # Pixel access
    # -------------------------------------------------------------------------

    def in_range(self, x: int, y: int) -> bool:
        """True if (x, y) is a pixel of this bitmap."""
        return 0 <= x < self.w and 0 <= y < self.h

    def uget(self, x: int, y: int) -> bool:
        """Read pixel (x, y) without a range check."""
        return bool(self.map[y, x // BM_WORDBITS] & bm_mask(x))

    def uset(self, x: int, y: int) -> None:
        """Blacken pixel (x, y) without a range check."""
        i = x // BM_WORDBITS
        self.map[y, i] = self.map[y, i] | bm_mask(x)

    def uclear(self, x: int, y: int) -> None:
        """Whiten pixel (x, y) without a range check."""
        i = x // BM_WORDBITS
        self.map[y, i] = self.map[y, i] & ~bm_mask(x)

    def utoggle(self, x: int, y: int) -> None:
        """Invert pixel (x, y) without a range check."""
        i = x // BM_WORDBITS
        self.map[y, i] = self.map[y, i] ^ bm_mask(x)

    def uput(self, x: int, y: int, black: bool) -> None:
        """Write pixel (x, y) without a range check."""
        if black:
            self.uset(x, y)
        else:
            self.uclear(x, y)

    def get(self, x: int, y: int) -> bool:
        return self.in_range(x, y) and self.uget(x, y)

    def set(self, x: int, y: int) -> None:
        if self.in_range(x, y):
            self.uset(x, y)

    def clear(self, x: int, y: int) -> None:
        if self.in_range(x, y):
            self.uclear(x, y)

    def toggle(self, x: int, y: int) -> None:
        if self.in_range(x, y):
            self.utoggle(x, y)

    def put(self, x: int, y: int, black: bool) -> None:
        if self.in_range(x, y):
            self.uput(x, y, black)

    # -------------------------------------------------------------------------
    # Whole-bitmap operations
    # -------------------------------------------------------------------------

    def duplicate(self) -> "Bitmap":
        bm = Bitmap(self.w, self.h)
        bm.map[:] = self.map
        return bm

    def clear_all(self) -> None:
        """Set every pixel (and the padding) to white."""
        self.map.fill(0)

    def clear_excess_padding(self) -> None:
        """Zero the unused bits at the end of each scanline."""
        rem = self.w % BM_WORDBITS
        if rem != 0:
            mask = np.uint64((BM_ALLBITS << (BM_WORDBITS - rem)) & BM_ALLBITS)
            self.map[:, self.dy - 1] &= mask

    def trace(self, **kwargs):
        """
        Trace this bitmap into vector curves.

        Keyword arguments are TraceParams fields (turdsize, turnpolicy,
        alphamax, opticurve, opttolerance, quantize_unit, progress, ...).

        Returns:
            Path object containing the traced curves
        """
        from .params import TraceParams
        from .trace import trace_bitmap

        return trace_bitmap(self, TraceParams.from_kwargs(**kwargs))

    def __repr__(self):
        return f"Bitmap({self.w}x{self.h})"
