from django.core.management.base import BaseCommand, CommandError

from ledger.services import LedgerAuditService


class Command(BaseCommand):
    help = "Checks that every wallet balance matches the sum of its activity log"

    def add_arguments(self, parser):
        parser.add_argument("--profile", type=int, help="Only check this profile's wallets")

    def handle(self, *args, **options):
        self.stdout.write("Checking wallet balances against activity...")
        discrepancies = LedgerAuditService.find_discrepancies(options.get("profile"))

        for item in discrepancies:
            self.stdout.write(
                self.style.WARNING(
                    f"Wallet {item['wallet_id']}: balance={item['balance']} "
                    f"activity_total={item['expected']}"
                )
            )
        if discrepancies:
            raise CommandError(f"{len(discrepancies)} wallet(s) out of balance.")
        self.stdout.write(self.style.SUCCESS("Ledger is consistent!"))
