"""
DNA file format constants, struct layouts and slot record flags.
"""
import struct

# Struct formats (little-endian throughout)
# File header: buffer_count(4)
COUNT_STRUCT = struct.Struct("<I")

# Record header fixed part: data_length(4) + unit_size(4) + seed(8) = 16 bytes
RECORD_FIXED_STRUCT = struct.Struct("<IIQ")

# Reserved header region is a run of u32 words ending in the sentinel
WORD_STRUCT = struct.Struct("<I")

# Packed slot record: header + primary + secondary + dom_primary + dom_secondary
SLOT_RECORD_STRUCT = struct.Struct("<QQQQQ")

# Sizes
COUNT_SIZE = COUNT_STRUCT.size  # 4 bytes
RECORD_FIXED_SIZE = RECORD_FIXED_STRUCT.size  # 16 bytes
WORD_SIZE = WORD_STRUCT.size  # 4 bytes
SLOT_RECORD_SIZE = SLOT_RECORD_STRUCT.size  # 40 bytes

# Tags
UNIT_SIZE_TAG = 16
FORMAT_ID = 1
HEADER_SENTINEL = 0x0A  # ASCII '\n'

# Header region bounds (in words, format_id and sentinel included)
MIN_HEADER_WORDS = 2
DEFAULT_MAX_HEADER_WORDS = 16

# Buffer limits
DEFAULT_CAPACITY = 16
MAX_BUFFER_LENGTH = 0xFFFFFFFF  # data_length is stored as uint32
MAX_BUFFER_COUNT = 0xFFFFFFFF
MAX_SEED = 0xFFFFFFFFFFFFFFFF
MAX_SLOT_HEADER = 0xFFFFFFFFFFFFFFFF
GROWTH_FACTOR = 2

# Slot record
SLOT_DATA_BYTES = 8

# Slot record error flags (bitwise)
FLAG_EXHAUSTED = 1 << 0  # 0x01 - insert refused, no free lane
FLAG_OVERRIDE = 1 << 1   # 0x02 - insert evicted an existing lane
