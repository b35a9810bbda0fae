from django.core.management import BaseCommand, CommandError
from solana.rpc.commitment import Confirmed, Finalized, Processed

from django_solana_nft_minter.choices import SolanaEnvironmentTypes
from django_solana_nft_minter.exceptions import ConfirmationTimeoutError
from django_solana_nft_minter.services.solana_query_service import SolanaQueryService
from django_solana_nft_minter.solana.confirmation_poller import (
    confirmation_status_name,
)


class Command(BaseCommand):
    help = (
        "Poll the signature status of a transaction until it reaches the requested "
        "commitment, fails on-chain or the timeout expires."
    )

    def add_arguments(self, parser):
        parser.add_argument("signature", help="Base58 transaction signature.")
        parser.add_argument(
            "--commitment",
            choices=[Processed, Confirmed, Finalized],
            default=None,
            help="Commitment level to wait for. Defaults to CONFIRMATION_COMMITMENT.",
        )
        parser.add_argument(
            "--timeout-ms",
            type=int,
            default=None,
            help="How long to keep polling, in milliseconds.",
        )
        parser.add_argument(
            "--environment",
            choices=SolanaEnvironmentTypes.values,
            default=None,
            help="Solana cluster to query. Defaults to DEFAULT_ENVIRONMENT.",
        )

    def handle(self, *args, **options):
        try:
            confirmation = SolanaQueryService(
                environment=options["environment"]
            ).await_transaction_confirmation(
                options["signature"],
                commitment=options["commitment"],
                timeout_ms=options["timeout_ms"],
            )
        except ConfirmationTimeoutError as e:
            raise CommandError(str(e))
        except ValueError as e:
            raise CommandError(f"Invalid arguments: {e}")

        summary = (
            f"signature={confirmation.tx_signature}, "
            f"status={confirmation.status}, "
            f"slot={confirmation.slot}, "
            f"confirmation_status={confirmation_status_name(confirmation.confirmation_status)}"
        )
        if confirmation.is_failure:
            self.stdout.write(
                self.style.ERROR(
                    f"Transaction failed on-chain: {summary}, error={confirmation.error}"
                )
            )
        else:
            self.stdout.write(self.style.SUCCESS(f"Transaction confirmed: {summary}"))
