def halfbits_to_floatbits(h):
    # exact widening of a half pattern, used to build inputs
    h_exp = h & 0x7C00
    f_sgn = (h & 0x8000) << 16
    if h_exp == 0:
        h_sig = h & 0x03FF
        if h_sig == 0:
            return f_sgn
        h_sig <<= 1
        while (h_sig & 0x0400) == 0:
            h_sig <<= 1
            h_exp += 1
        f_exp = (127 - 15 - h_exp) << 23
        f_sig = (h_sig & 0x03FF) << 13
        return f_sgn + f_exp + f_sig
    if h_exp == 0x7C00:
        return f_sgn + 0x7F800000 + ((h & 0x03FF) << 13)
    return f_sgn + (((h & 0x7FFF) + 0x1C000) << 13)
