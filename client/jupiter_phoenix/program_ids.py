import os

import spl.token.constants
from solders import sysvar
from solders.pubkey import Pubkey

PHOENIX_PROGRAM_ID = Pubkey.from_string(
    os.environ.get("PHOENIX", "phnxNHfGNVjpVVuHkceK3MgwZ1bW25ijfWACKhVFbBH")
)

CLOCK_PROGRAM_ID = sysvar.CLOCK
SPL_TOKEN_PROGRAM_ID = spl.token.constants.TOKEN_PROGRAM_ID
