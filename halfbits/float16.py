import struct



def float_as_u32(f):

    return struct.unpack('<I', struct.pack('<f', f))[0]

def u32_as_float(u):

    return struct.unpack('<f', struct.pack('<I', u))[0]


def floatbits_to_halfbits(f):
    """
    Convert the bit pattern of an IEEE 754 single-precision float into the
    bit pattern of the nearest half-precision float (round half to even).

    Defined for every 32-bit input: NaNs stay NaN, overflow goes to signed
    infinity and underflow goes to a signed subnormal or zero.
    """
    f &= 0xFFFFFFFF

    h_sgn = (f & 0x80000000) >> 16
    f_exp = f & 0x7F800000
    f_sig = f & 0x007FFFFF

    # Unbiased exponent >= 16: inf, NaN or overflow
    if f_exp >= 0x47800000:
        if f_exp == 0x7F800000 and f_sig != 0:
            # NaN, keep the top 10 payload bits
            ret = 0x7C00 + (f_sig >> 13)
            if ret == 0x7C00:
                # payload fell off the end, must not turn into inf
                ret += 1
            return h_sgn + ret
        return h_sgn + 0x7C00

    # Unbiased exponent <= -15: subnormal half or signed zero
    if f_exp <= 0x38000000:
        if f_exp < 0x33000000:
            return h_sgn

        f_exp >>= 23                # 102..112
        f_sig += 0x00800000         # hidden bit
        f_sig >>= (113 - f_exp)     # 1..11

        # Round half to even. The shift above may have dropped up to 11 bits
        # that decide whether this is really a tie, so look at them in f.
        if (f_sig & 0x3FFF) != 0x1000 or (f & 0x07FF):
            f_sig += 0x1000

        # A carry out of the significand lands in the exponent field and
        # gives the smallest normal, which is correct.
        return h_sgn + (f_sig >> 13)

    # Normal range, rebias 127 -> 15
    h_exp = (f_exp - 0x38000000) >> 13

    if (f_sig & 0x3FFF) != 0x1000:
        f_sig += 0x1000

    # Carry into the exponent is fine, up to and including inf
    return h_sgn + h_exp + (f_sig >> 13)


def float_to_halfbits(f_val):

    try:
        bits = float_as_u32(f_val)
    except OverflowError:

        if f_val > 0:
            return 0x7C00 # +Inf
        else:
            return 0xFC00 # -Inf

    return floatbits_to_halfbits(bits)


def unpack_reg(reg_val_64, lanes=4):

    return [(reg_val_64 >> (i * 16)) & 0xFFFF for i in range(lanes)]

def pack_reg(u16_list):

    res = 0
    for i, val in enumerate(u16_list):
        res |= ((val & 0xFFFF) << (i * 16))
    return res

def unpack_reg32(reg_val_128, lanes=4):

    return [(reg_val_128 >> (i * 32)) & 0xFFFFFFFF for i in range(lanes)]


def convert_reg(reg_val_128, lanes=4):
    # FCVT.H.S on every lane, fp32 x lanes -> fp16 x lanes
    return pack_reg([floatbits_to_halfbits(u) for u in unpack_reg32(reg_val_128, lanes)])
