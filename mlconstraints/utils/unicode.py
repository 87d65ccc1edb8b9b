ARROW = "→"

# Omicron is skipped, it reads too much like a latin "o".
GREEK_LOWER = "αβγδεζηθικλμνξπρστυφχψω"
