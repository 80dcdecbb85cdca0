from solders.pubkey import Pubkey

from jupiter_phoenix import program_ids as pids


def get_vault_address(
        market: Pubkey,
        mint: Pubkey,
        program_id: Pubkey = pids.PHOENIX_PROGRAM_ID,
) -> Pubkey:
    key, _ = Pubkey.find_program_address(
        [b"vault", bytes(market), bytes(mint)],
        program_id,
    )
    return key


def get_log_authority(program_id: Pubkey = pids.PHOENIX_PROGRAM_ID) -> Pubkey:
    return Pubkey.find_program_address([b"log"], program_id)[0]
