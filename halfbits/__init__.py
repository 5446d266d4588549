from halfbits.float16 import (
    convert_reg,
    float_as_u32,
    float_to_halfbits,
    floatbits_to_halfbits,
    pack_reg,
    u32_as_float,
    unpack_reg,
    unpack_reg32,
)
from halfbits.vectorized import (
    convert_buffer,
    float32_to_halfbits_array,
    floatbits_to_halfbits_array,
)

__version__ = '0.1.0'
