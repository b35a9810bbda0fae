import logging

from solana.rpc.commitment import Commitment
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.message import Message
from solders.pubkey import Pubkey
from solders.system_program import CreateAccountParams, create_account
from solders.transaction import Transaction
from spl.memo.constants import MEMO_PROGRAM_ID
from spl.memo.instructions import create_memo
from spl.memo.models import MemoParams
from spl.token.constants import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    MINT_LEN,
    TOKEN_PROGRAM_ID,
)
from spl.token.instructions import (
    create_associated_token_account,
    initialize_mint,
    mint_to,
    set_authority,
)
from spl.token.models import (
    AuthorityType,
    InitializeMintParams,
    MintToParams,
    SetAuthorityParams,
)

from django_solana_nft_minter.exceptions import NftMintError
from django_solana_nft_minter.solana.base_solana_client import BaseSolanaClient
from django_solana_nft_minter.solana.dtos import MintedTokenDTO

solana_client_logger = logging.getLogger(__name__)

NFT_DECIMALS = 0
NFT_SUPPLY = 1


class SolanaNftMintClient:
    """
    Mints a single, fixed-supply token to the owner and records the metadata
    URI in a memo of the same transaction.
    """

    def __init__(self, base_solana_client: BaseSolanaClient):
        self.base_solana_client = base_solana_client

    @staticmethod
    def get_associated_token_address(owner: Pubkey, mint: Pubkey) -> Pubkey:
        # Seed order must match what the Associated Token program expects
        seeds = [bytes(owner), bytes(TOKEN_PROGRAM_ID), bytes(mint)]
        associated_token_address, _ = Pubkey.find_program_address(
            seeds, ASSOCIATED_TOKEN_PROGRAM_ID
        )
        return associated_token_address

    def build_mint_instructions(
        self,
        payer: Pubkey,
        mint: Pubkey,
        owner: Pubkey,
        metadata_uri: str,
        rent_lamports: int,
    ) -> list[Instruction]:
        owner_token_account = self.get_associated_token_address(owner, mint)

        return [
            create_account(
                CreateAccountParams(
                    from_pubkey=payer,
                    to_pubkey=mint,
                    lamports=rent_lamports,
                    space=MINT_LEN,
                    owner=TOKEN_PROGRAM_ID,
                )
            ),
            initialize_mint(
                InitializeMintParams(
                    decimals=NFT_DECIMALS,
                    program_id=TOKEN_PROGRAM_ID,
                    mint=mint,
                    mint_authority=payer,
                    freeze_authority=payer,
                )
            ),
            create_associated_token_account(
                payer=payer,
                owner=owner,
                mint=mint,
                token_program_id=TOKEN_PROGRAM_ID,
            ),
            mint_to(
                MintToParams(
                    program_id=TOKEN_PROGRAM_ID,
                    mint=mint,
                    dest=owner_token_account,
                    mint_authority=payer,
                    amount=NFT_SUPPLY,
                )
            ),
            # Without a mint authority the supply stays at one
            set_authority(
                SetAuthorityParams(
                    program_id=TOKEN_PROGRAM_ID,
                    account=mint,
                    authority=AuthorityType.MINT_TOKENS,
                    current_authority=payer,
                    new_authority=None,
                )
            ),
            create_memo(
                MemoParams(
                    program_id=MEMO_PROGRAM_ID,
                    signer=payer,
                    message=metadata_uri.encode("utf-8"),
                )
            ),
        ]

    async def create_mint_transaction(
        self,
        metadata_uri: str,
        owner: Pubkey,
        mint_keypair: Keypair,
        payer_keypair: Keypair,
    ) -> Transaction:
        http_client = self.base_solana_client.http_client

        rent_lamports = (
            await http_client.get_minimum_balance_for_rent_exemption(MINT_LEN)
        ).value
        latest_blockhash = (await http_client.get_latest_blockhash()).value

        instructions = self.build_mint_instructions(
            payer=payer_keypair.pubkey(),
            mint=mint_keypair.pubkey(),
            owner=owner,
            metadata_uri=metadata_uri,
            rent_lamports=rent_lamports,
        )
        msg = Message(payer=payer_keypair.pubkey(), instructions=instructions)

        return Transaction(
            from_keypairs=[payer_keypair, mint_keypair],
            message=msg,
            recent_blockhash=latest_blockhash.blockhash,
        )

    async def mint_nft(
        self,
        metadata_uri: str,
        owner: Pubkey | None = None,
        commitment: Commitment | None = None,
    ) -> MintedTokenDTO:
        payer_keypair = self.base_solana_client.MINTER_KEYPAIR
        owner = owner or payer_keypair.pubkey()
        mint_keypair = Keypair()

        transaction = await self.create_mint_transaction(
            metadata_uri=metadata_uri,
            owner=owner,
            mint_keypair=mint_keypair,
            payer_keypair=payer_keypair,
        )

        # Diagnostic only, the outcome never gates the real submission
        simulation = await self.base_solana_client.http_client.simulate_transaction(
            transaction
        )
        if simulation.err is not None:
            solana_client_logger.warning(
                f"Mint simulation reported an error: {simulation.err}, logs: {simulation.logs}"
            )

        tx_signature = await self.base_solana_client.send_transaction_with_retry(
            transaction
        )
        solana_client_logger.info(
            f"Mint transaction {tx_signature} sent for mint {mint_keypair.pubkey()}"
        )

        confirmation = await self.base_solana_client.confirm_transaction(
            tx_signature, commitment=commitment
        )
        if confirmation.is_failure:
            raise NftMintError(
                f"Mint transaction {tx_signature} failed on-chain: {confirmation.error}",
                on_chain_error=confirmation.error,
            )

        return MintedTokenDTO(
            mint_address=mint_keypair.pubkey(),
            tx_signature=tx_signature,
            confirmation=confirmation,
        )
