import struct
import sys

import numpy as np
import matplotlib.pyplot as plt

from halfbits.float16 import floatbits_to_halfbits, u32_as_float
from halfbits.vectorized import float32_to_halfbits_array


DEFAULT_PATTERNS = [
    0x00000000,  # +0
    0x80000000,  # -0
    0x3F800000,  # 1.0
    0xC0000000,  # -2.0
    0x3F801000,  # 1 + half ulp, tie -> even
    0x3F803000,  # odd + half ulp, tie -> up
    0x477FE000,  # 65504, largest half
    0x477FF000,  # 65520, rounds up to inf
    0x387FFFFF,  # rounds up to smallest normal
    0x33800000,  # 2**-24, smallest subnormal
    0x33000000,  # 2**-25, tie -> zero
    0x33000001,  # just above 2**-25
    0x7F800000,  # +inf
    0xFF800000,  # -inf
    0x7FC00000,  # quiet NaN
    0x7F800001,  # NaN, payload lost
]

HALF_UNIT_ROUNDOFF = 2.0 ** -11
HALF_MIN_NORMAL = 2.0 ** -14
HALF_MAX = 65504.0


def u16_to_float(u16_val):

    bytes_val = struct.pack('<H', u16_val)
    return struct.unpack('<e', bytes_val)[0]


def format_row(bits):
    h = floatbits_to_halfbits(bits)
    return f"0x{bits:08x} | {u32_as_float(bits):<16.9g} | 0x{h:04x}     | {u16_to_float(h):<12.6g}"


def parse_pattern(text):
    bits = int(text, 16)
    if not 0 <= bits <= 0xFFFFFFFF:
        raise ValueError(f"{text} does not fit in 32 bits")
    return bits


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]

    try:
        patterns = [parse_pattern(a) for a in argv] or DEFAULT_PATTERNS
    except ValueError as e:
        print(f"{e}", file=sys.stderr)
        print("usage: python -m halfbits.report [f32_hex ...]", file=sys.stderr)
        return -1

    print(f"{'F32 (Hex)':<10} | {'F32 Value':<16} | {'F16 (Hex)':<10} | {'F16 Value':<12}")
    print("-" * 60)

    for bits in patterns:
        print(format_row(bits))

    return 0


def plot_rounding_error(path, count=4096):

    x = np.geomspace(HALF_MIN_NORMAL, HALF_MAX, count).astype(np.float32)
    h = float32_to_halfbits_array(x).view(np.float16)

    exact = x.astype(np.float64)
    rel_err = np.abs(h.astype(np.float64) - exact) / exact

    fig = plt.figure(figsize=(11, 6))
    ax = fig.add_subplot(111)

    ax.semilogx(exact, rel_err, '.', markersize=2, color='blue', label="|fp16 - fp32| / fp32")
    ax.axhline(HALF_UNIT_ROUNDOFF, color='red', linestyle='--', label="2^-11")

    ax.set_title("fp32 -> fp16 relative rounding error", fontsize=16)
    ax.set_xlabel("value")
    ax.set_ylabel("relative error")
    ax.legend(loc='upper right')

    plt.tight_layout()
    fig.savefig(path)
    plt.close(fig)

    return rel_err


if __name__ == '__main__':
    sys.exit(main())
