import numpy as np


U32_0x1000 = np.uint32(0x1000)
U32_ZERO = np.uint32(0)


def floatbits_to_halfbits_array(bits):
    """
    Element-wise floatbits_to_halfbits over an array of single-precision bit
    patterns. Returns a uint16 array of the same shape.

    Every branch is evaluated for every element and the right one is picked
    with np.select, so the intermediate values of the unused branches are
    garbage and must stay masked out.
    """
    bits = np.asarray(bits, dtype=np.uint32)
    f = bits.reshape(-1)

    h_sgn = (f & np.uint32(0x80000000)) >> np.uint32(16)
    f_exp = f & np.uint32(0x7F800000)
    f_sig = f & np.uint32(0x007FFFFF)

    # inf / NaN / overflow
    big = f_exp >= np.uint32(0x47800000)
    nan = (f_exp == np.uint32(0x7F800000)) & (f_sig != 0)
    nan_bits = np.uint32(0x7C00) + (f_sig >> np.uint32(13))
    nan_bits = nan_bits + (nan_bits == np.uint32(0x7C00)).astype(np.uint32)

    # subnormal / zero
    tiny = f_exp <= np.uint32(0x38000000)
    zero = f_exp < np.uint32(0x33000000)
    shift = np.clip(113 - (f_exp >> np.uint32(23)).astype(np.int64), 0, 31).astype(np.uint32)
    sub_sig = (f_sig + np.uint32(0x00800000)) >> shift
    round_up = ((sub_sig & np.uint32(0x3FFF)) != U32_0x1000) | ((f & np.uint32(0x07FF)) != 0)
    sub_sig = sub_sig + np.where(round_up, U32_0x1000, U32_ZERO)
    sub_bits = sub_sig >> np.uint32(13)

    # normal; h_exp wraps around for the small exponents, never selected there
    h_exp = (f_exp - np.uint32(0x38000000)) >> np.uint32(13)
    norm_sig = f_sig + np.where((f_sig & np.uint32(0x3FFF)) != U32_0x1000, U32_0x1000, U32_ZERO)
    norm_bits = h_exp + (norm_sig >> np.uint32(13))

    inf_bits = np.full(f.shape, 0x7C00, dtype=np.uint32)
    zero_bits = np.zeros(f.shape, dtype=np.uint32)

    mag = np.select([nan, big, zero, tiny],
                    [nan_bits, inf_bits, zero_bits, sub_bits],
                    default=norm_bits)

    return (h_sgn + mag).astype(np.uint16).reshape(bits.shape)


def float32_to_halfbits_array(values):

    f32 = np.ascontiguousarray(values, dtype=np.float32)
    return floatbits_to_halfbits_array(f32.view(np.uint32))


def convert_buffer(buf, byteorder='<'):

    if byteorder not in ('<', '>'):
        raise ValueError(f"byteorder must be '<' or '>', got {byteorder!r}")

    nbytes = memoryview(buf).nbytes
    if nbytes % 4 != 0:
        raise ValueError(f"buffer length {nbytes} is not a multiple of 4")

    bits = np.frombuffer(buf, dtype=np.dtype(byteorder + 'u4'))
    return floatbits_to_halfbits_array(bits).astype(np.dtype(byteorder + 'u2')).tobytes()
