"""Names of the dat entries expected inside a MAME EXTRAs archive."""

ALL_NON_ZIPPED_CONTENT = "all_non-zipped_content.dat"
ARTWORK = "artwork.dat"
SAMPLES = "samples.dat"

# Order matters: fragments are written in this order
FILES = (ALL_NON_ZIPPED_CONTENT, ARTWORK, SAMPLES)
