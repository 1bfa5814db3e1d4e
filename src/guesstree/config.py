"""config.py - Configuration and constants for GuessTree"""

DB_FILE = "animals.db"
INITIAL_ANSWER = "elephant"
TEXT_ENCODING = "utf-8"
TERMINATOR = 0

POOL_MIN_CAPACITY = 4096
NODE_MIN_CAPACITY = 16

# On-disk record layouts (little-endian)
COUNT_FORMAT = "<I"
NODE_HEAD_FORMAT = "<BI"  # kind, text offset
NODE_CHILDREN_FORMAT = "<II"  # yes, no
