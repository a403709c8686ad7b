"""Constants for pystring16 - defaults and Unicode code unit ranges."""

# Default locale handed to the segmentation service when a session is opened.
# Extended grapheme clusters do not vary by locale for the bundled backend,
# but the value is part of the service contract.
DEFAULT_LOCALE = "en_US"

# Returned by preceding/following boundary queries when no boundary exists
# in that direction (mirrors ICU's UBRK_DONE).
DONE = -1

# Code unit ranges
MAX_CODE_UNIT = 0xFFFF
HIGH_SURROGATE_START = 0xD800
HIGH_SURROGATE_END = 0xDBFF
LOW_SURROGATE_START = 0xDC00
LOW_SURROGATE_END = 0xDFFF

# Codec used to bridge between str and code units
UTF16_CODEC = "utf-16-le"
UTF16_ERRORS = "surrogatepass"
