import os

LABEL = "Phoenix"

# number of price levels materialized per side on every refresh
LADDER_LEVELS = int(os.environ.get("PHOENIX_LADDER_LEVELS", 128))

BPS_DENOMINATOR = 10_000
U64_MAX = 2**64 - 1
