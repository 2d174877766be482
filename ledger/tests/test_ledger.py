import uuid
from decimal import Decimal
from unittest.mock import patch

from django.db import DatabaseError
from django.test import SimpleTestCase, TransactionTestCase

from ledger.exceptions import (
    ConflictError,
    DuplicateWalletType,
    InactiveResourceError,
    InsufficientBalanceError,
    InvalidAmount,
    ProfileNotFound,
    SameWallet,
    UnauthorizedError,
    ValidationError,
    WalletInactive,
    WalletNotFound,
)
from ledger.models import Profile, Wallet, WalletActivity
from ledger.services import LedgerAuditService, WalletService, parse_amount
from ledger.tests.helpers import make_profile, make_wallet


class ParseAmountTest(SimpleTestCase):
    def test_accepts_decimals_ints_and_strings(self):
        self.assertEqual(parse_amount(Decimal("40")), Decimal("40.00"))
        self.assertEqual(parse_amount(7), Decimal("7.00"))
        self.assertEqual(parse_amount("12.5"), Decimal("12.50"))
        self.assertEqual(parse_amount(40.1), Decimal("40.10"))

    def test_rejects_non_positive(self):
        for value in (0, "0.00", -1, "-100.00"):
            with self.subTest(value=value):
                with self.assertRaises(InvalidAmount):
                    parse_amount(value)

    def test_rejects_garbage(self):
        for value in (None, True, "abc", "NaN", "Infinity", ""):
            with self.subTest(value=value):
                with self.assertRaises(InvalidAmount):
                    parse_amount(value)

    def test_rejects_sub_cent_precision(self):
        with self.assertRaises(InvalidAmount):
            parse_amount("0.001")
        self.assertEqual(parse_amount("1.100"), Decimal("1.10"))

    def test_rejects_oversized(self):
        with self.assertRaises(InvalidAmount):
            parse_amount("1" + "0" * 17)

    def test_invalid_amount_is_a_validation_error(self):
        self.assertTrue(issubclass(InvalidAmount, ValidationError))


class WalletLifecycleTest(TransactionTestCase):
    def setUp(self):
        self.profile = make_profile()

    def test_create_wallet_starts_empty_and_active(self):
        wallet = WalletService.create_wallet(self.profile, "Cash")
        self.assertEqual(wallet.balance, Decimal("0.00"))
        self.assertTrue(wallet.is_active)
        self.assertEqual(wallet.currency, "PHP")
        self.assertEqual(wallet.profile_id, self.profile.pk)

    def test_create_wallet_with_currency(self):
        wallet = WalletService.create_wallet(self.profile, "Travel", currency="USD")
        self.assertEqual(wallet.currency, "USD")

    def test_duplicate_wallet_type_conflicts(self):
        WalletService.create_wallet(self.profile, "Cash")
        with self.assertRaises(DuplicateWalletType) as ctx:
            WalletService.create_wallet(self.profile, "Cash")
        self.assertIsInstance(ctx.exception, ConflictError)
        self.assertEqual(Wallet.objects.filter(profile_id=self.profile.pk).count(), 1)

    def test_same_type_for_other_profile_or_other_type_succeeds(self):
        WalletService.create_wallet(self.profile, "Cash")
        WalletService.create_wallet(self.profile, "Bank")
        WalletService.create_wallet(make_profile("bob@example.com"), "Cash")
        self.assertEqual(Wallet.objects.count(), 3)

    def test_create_wallet_requires_stored_profile(self):
        ghost = Profile(pk=999_999, email="ghost@example.com")
        with self.assertRaises(ProfileNotFound):
            WalletService.create_wallet(ghost, "Cash")

    def test_blank_wallet_type_rejected(self):
        with self.assertRaises(ValidationError):
            WalletService.create_wallet(self.profile, "   ")

    def test_deactivate_and_activate_are_idempotent(self):
        wallet = WalletService.create_wallet(self.profile, "Cash")

        WalletService.deactivate_wallet(self.profile, wallet.pk)
        again = WalletService.deactivate_wallet(self.profile, wallet.pk)
        self.assertFalse(again.is_active)

        WalletService.activate_wallet(self.profile, wallet.pk)
        again = WalletService.activate_wallet(self.profile, wallet.pk)
        self.assertTrue(again.is_active)

    def test_update_wallet_partial(self):
        wallet = WalletService.create_wallet(self.profile, "Cash")
        updated = WalletService.update_wallet(self.profile, wallet.pk, currency="USD")
        self.assertEqual(updated.currency, "USD")
        self.assertEqual(updated.wallet_type, "Cash")

        updated = WalletService.update_wallet(self.profile, wallet.pk, wallet_type="Pocket")
        self.assertEqual(updated.wallet_type, "Pocket")
        self.assertEqual(updated.currency, "USD")

    def test_update_wallet_keeping_own_type_is_allowed(self):
        wallet = WalletService.create_wallet(self.profile, "Cash")
        updated = WalletService.update_wallet(self.profile, wallet.pk, wallet_type="Cash")
        self.assertEqual(updated.wallet_type, "Cash")

    def test_update_wallet_to_taken_type_conflicts(self):
        WalletService.create_wallet(self.profile, "Cash")
        bank = WalletService.create_wallet(self.profile, "Bank")
        with self.assertRaises(DuplicateWalletType):
            WalletService.update_wallet(self.profile, bank.pk, wallet_type="Cash")
        bank.refresh_from_db()
        self.assertEqual(bank.wallet_type, "Bank")

    def test_update_missing_wallet(self):
        with self.assertRaises(WalletNotFound):
            WalletService.update_wallet(self.profile, 424242, currency="USD")

    def test_delete_wallet_removes_activity_log(self):
        wallet = make_wallet(self.profile, "Cash", balance="50.00")
        WalletService.withdraw(self.profile, wallet.pk, "10.00")
        other = make_wallet(self.profile, "Bank", balance="5.00")

        WalletService.delete_wallet(self.profile, wallet.pk)

        self.assertFalse(Wallet.objects.filter(pk=wallet.pk).exists())
        self.assertFalse(WalletActivity.objects.filter(wallet_id=wallet.pk).exists())
        self.assertEqual(WalletActivity.objects.filter(wallet_id=other.pk).count(), 1)

    def test_delete_missing_wallet(self):
        with self.assertRaises(WalletNotFound):
            WalletService.delete_wallet(self.profile, 424242)

    def test_get_total_balance_sums_active_wallets_only(self):
        make_wallet(self.profile, "Cash", balance="100.00")
        make_wallet(self.profile, "Bank", balance="25.50")
        frozen = make_wallet(self.profile, "Frozen", balance="1000.00")
        WalletService.deactivate_wallet(self.profile, frozen.pk)

        self.assertEqual(WalletService.get_total_balance(self.profile), Decimal("125.50"))

    def test_get_total_balance_is_zero_without_wallets(self):
        self.assertEqual(WalletService.get_total_balance(self.profile), Decimal("0.00"))

    def test_list_wallets(self):
        make_wallet(self.profile, "Cash")
        bank = make_wallet(self.profile, "Bank")
        WalletService.deactivate_wallet(self.profile, bank.pk)
        make_wallet(make_profile("bob@example.com"), "Cash")

        self.assertEqual(WalletService.list_wallets(self.profile).count(), 2)
        active = WalletService.list_wallets(self.profile, active_only=True)
        self.assertEqual([w.wallet_type for w in active], ["Cash"])


class DepositWithdrawTest(TransactionTestCase):
    def setUp(self):
        self.profile = make_profile()
        self.wallet = WalletService.create_wallet(self.profile, "Cash")

    def test_deposit_increases_balance_and_logs_activity(self):
        activity = WalletService.deposit(self.profile, self.wallet.pk, "100.00")

        self.wallet.refresh_from_db()
        self.assertEqual(self.wallet.balance, Decimal("100.00"))
        self.assertEqual(activity.activity_type, WalletActivity.ActivityType.DEPOSIT)
        self.assertEqual(activity.amount, Decimal("100.00"))
        self.assertEqual(activity.profile_id, self.profile.pk)
        self.assertIsNone(activity.related_wallet_id)

    def test_withdraw_stores_negated_amount(self):
        WalletService.deposit(self.profile, self.wallet.pk, "100.00")
        activity = WalletService.withdraw(self.profile, self.wallet.pk, "40.00")

        self.wallet.refresh_from_db()
        self.assertEqual(self.wallet.balance, Decimal("60.00"))
        self.assertEqual(activity.activity_type, WalletActivity.ActivityType.WITHDRAW)
        self.assertEqual(activity.amount, Decimal("-40.00"))

    def test_deposit_then_withdraw_round_trips(self):
        WalletService.deposit(self.profile, self.wallet.pk, "33.33")
        WalletService.deposit(self.profile, self.wallet.pk, "12.34")
        WalletService.withdraw(self.profile, self.wallet.pk, "12.34")

        self.wallet.refresh_from_db()
        self.assertEqual(self.wallet.balance, Decimal("33.33"))

    def test_withdraw_everything_leaves_zero(self):
        WalletService.deposit(self.profile, self.wallet.pk, "10.00")
        WalletService.withdraw(self.profile, self.wallet.pk, "10.00")
        self.wallet.refresh_from_db()
        self.assertEqual(self.wallet.balance, Decimal("0.00"))

    def test_invalid_amounts_touch_nothing(self):
        for value in ("0", "-5.00"):
            with self.subTest(value=value):
                with self.assertRaises(InvalidAmount):
                    WalletService.deposit(self.profile, self.wallet.pk, value)
                with self.assertRaises(InvalidAmount):
                    WalletService.withdraw(self.profile, self.wallet.pk, value)
        self.assertFalse(WalletActivity.objects.exists())

    def test_insufficient_balance_reports_available_and_requested(self):
        WalletService.deposit(self.profile, self.wallet.pk, "100.00")

        with self.assertRaises(InsufficientBalanceError) as ctx:
            WalletService.withdraw(self.profile, self.wallet.pk, "150.00")

        self.assertEqual(ctx.exception.available, Decimal("100.00"))
        self.assertEqual(ctx.exception.requested, Decimal("150.00"))
        self.wallet.refresh_from_db()
        self.assertEqual(self.wallet.balance, Decimal("100.00"))
        self.assertEqual(WalletActivity.objects.count(), 1)

    def test_inactive_wallet_rejects_deposit_and_withdraw(self):
        WalletService.deposit(self.profile, self.wallet.pk, "10.00")
        WalletService.deactivate_wallet(self.profile, self.wallet.pk)

        with self.assertRaises(WalletInactive) as ctx:
            WalletService.deposit(self.profile, self.wallet.pk, "1.00")
        self.assertIsInstance(ctx.exception, InactiveResourceError)
        with self.assertRaises(WalletInactive):
            WalletService.withdraw(self.profile, self.wallet.pk, "1.00")

        self.assertEqual(WalletActivity.objects.count(), 1)

    def test_missing_wallet(self):
        with self.assertRaises(WalletNotFound):
            WalletService.deposit(self.profile, 424242, "1.00")
        with self.assertRaises(WalletNotFound):
            WalletService.withdraw(self.profile, 424242, "1.00")

    def test_foreign_wallet_is_unauthorized(self):
        mallory = make_profile("mallory@example.com")
        with self.assertRaises(UnauthorizedError):
            WalletService.deposit(mallory, self.wallet.pk, "1.00")
        with self.assertRaises(UnauthorizedError):
            WalletService.deactivate_wallet(mallory, self.wallet.pk)
        with self.assertRaises(UnauthorizedError):
            WalletService.delete_wallet(mallory, self.wallet.pk)

        self.wallet.refresh_from_db()
        self.assertEqual(self.wallet.balance, Decimal("0.00"))
        self.assertTrue(self.wallet.is_active)

    def test_failed_activity_append_rolls_back_balance(self):
        with patch(
            "ledger.services.wallet.WalletService._record",
            side_effect=DatabaseError("disk full"),
        ):
            with self.assertRaises(DatabaseError):
                WalletService.deposit(self.profile, self.wallet.pk, "25.00")

        self.wallet.refresh_from_db()
        self.assertEqual(self.wallet.balance, Decimal("0.00"))
        self.assertFalse(WalletActivity.objects.exists())

    def test_deposit_idempotency(self):
        key = str(uuid.uuid4())

        first = WalletService.deposit(self.profile, self.wallet.pk, "10.00", idempotency_key=key)
        second = WalletService.deposit(self.profile, self.wallet.pk, "10.00", idempotency_key=key)

        self.assertEqual(first.pk, second.pk)
        self.wallet.refresh_from_db()
        self.assertEqual(self.wallet.balance, Decimal("10.00"))

    def test_idempotency_key_reuse_with_other_parameters_conflicts(self):
        key = str(uuid.uuid4())
        WalletService.deposit(self.profile, self.wallet.pk, "10.00", idempotency_key=key)

        with self.assertRaises(ConflictError):
            WalletService.deposit(self.profile, self.wallet.pk, "99.00", idempotency_key=key)
        with self.assertRaises(ConflictError):
            WalletService.withdraw(self.profile, self.wallet.pk, "10.00", idempotency_key=key)

        self.wallet.refresh_from_db()
        self.assertEqual(self.wallet.balance, Decimal("10.00"))

    def test_withdraw_idempotency(self):
        WalletService.deposit(self.profile, self.wallet.pk, "50.00")
        key = str(uuid.uuid4())

        WalletService.withdraw(self.profile, self.wallet.pk, "20.00", idempotency_key=key)
        WalletService.withdraw(self.profile, self.wallet.pk, "20.00", idempotency_key=key)

        self.wallet.refresh_from_db()
        self.assertEqual(self.wallet.balance, Decimal("30.00"))

    def test_idempotency_keys_are_scoped_per_profile(self):
        bob = make_profile("bob@example.com")
        bob_wallet = make_wallet(bob, "Cash")

        WalletService.deposit(self.profile, self.wallet.pk, "10.00", idempotency_key="order-1")
        activity = WalletService.deposit(bob, bob_wallet.pk, "25.00", idempotency_key="order-1")

        self.assertEqual(activity.profile_id, bob.pk)
        bob_wallet.refresh_from_db()
        self.assertEqual(bob_wallet.balance, Decimal("25.00"))
        self.wallet.refresh_from_db()
        self.assertEqual(self.wallet.balance, Decimal("10.00"))

    def test_deposit_beyond_balance_limit_rejected(self):
        WalletService.deposit(self.profile, self.wallet.pk, "90000000000000000")

        with self.assertRaises(InvalidAmount):
            WalletService.deposit(self.profile, self.wallet.pk, "90000000000000000")

        self.wallet.refresh_from_db()
        self.assertEqual(self.wallet.balance, Decimal("90000000000000000.00"))
        self.assertEqual(WalletActivity.objects.count(), 1)


class TransferTest(TransactionTestCase):
    def setUp(self):
        self.profile = make_profile()
        self.source = make_wallet(self.profile, "Cash", balance="100.00")
        self.destination = make_wallet(self.profile, "Bank")

    def _balances(self):
        self.source.refresh_from_db()
        self.destination.refresh_from_db()
        return self.source.balance, self.destination.balance

    def test_transfer_moves_funds_and_preserves_sum(self):
        source, destination = WalletService.transfer(
            self.profile, self.source.pk, self.destination.pk, "30.00"
        )

        self.assertEqual(source.balance, Decimal("70.00"))
        self.assertEqual(destination.balance, Decimal("30.00"))
        self.assertEqual(sum(self._balances()), Decimal("100.00"))

    def test_transfer_writes_two_cross_referenced_legs(self):
        before = WalletActivity.objects.count()
        WalletService.transfer(self.profile, self.source.pk, self.destination.pk, "30.00")
        self.assertEqual(WalletActivity.objects.count(), before + 2)

        out_leg = WalletActivity.objects.get(
            activity_type=WalletActivity.ActivityType.TRANSFER_OUT
        )
        in_leg = WalletActivity.objects.get(
            activity_type=WalletActivity.ActivityType.TRANSFER_IN
        )
        self.assertEqual(out_leg.wallet_id, self.source.pk)
        self.assertEqual(out_leg.amount, Decimal("-30.00"))
        self.assertEqual(out_leg.related_wallet_id, self.destination.pk)
        self.assertEqual(in_leg.wallet_id, self.destination.pk)
        self.assertEqual(in_leg.amount, Decimal("30.00"))
        self.assertEqual(in_leg.related_wallet_id, self.source.pk)

    def test_same_wallet_rejected(self):
        with self.assertRaises(SameWallet) as ctx:
            WalletService.transfer(self.profile, self.source.pk, self.source.pk, "1.00")
        self.assertIsInstance(ctx.exception, ValidationError)
        self.assertEqual(WalletActivity.objects.count(), 1)

    def test_insufficient_balance_changes_nothing(self):
        with self.assertRaises(InsufficientBalanceError):
            WalletService.transfer(
                self.profile, self.source.pk, self.destination.pk, "100.01"
            )
        self.assertEqual(self._balances(), (Decimal("100.00"), Decimal("0.00")))
        self.assertEqual(WalletActivity.objects.count(), 1)

    def test_inactive_destination_blocks_transfer(self):
        WalletService.deactivate_wallet(self.profile, self.destination.pk)
        with self.assertRaises(WalletInactive) as ctx:
            WalletService.transfer(self.profile, self.source.pk, self.destination.pk, "5.00")
        self.assertIn("Destination", str(ctx.exception))
        self.assertEqual(self._balances(), (Decimal("100.00"), Decimal("0.00")))

    def test_inactive_source_blocks_transfer(self):
        WalletService.deactivate_wallet(self.profile, self.source.pk)
        with self.assertRaises(WalletInactive) as ctx:
            WalletService.transfer(self.profile, self.source.pk, self.destination.pk, "5.00")
        self.assertIn("Source", str(ctx.exception))
        self.assertEqual(WalletActivity.objects.count(), 1)

    def test_missing_wallets(self):
        with self.assertRaises(WalletNotFound) as ctx:
            WalletService.transfer(self.profile, 424242, self.destination.pk, "5.00")
        self.assertIn("Source", str(ctx.exception))
        with self.assertRaises(WalletNotFound) as ctx:
            WalletService.transfer(self.profile, self.source.pk, 424242, "5.00")
        self.assertIn("Destination", str(ctx.exception))

    def test_transfer_into_foreign_wallet_is_unauthorized(self):
        foreign = make_wallet(make_profile("bob@example.com"), "Cash")
        with self.assertRaises(UnauthorizedError):
            WalletService.transfer(self.profile, self.source.pk, foreign.pk, "5.00")
        foreign.refresh_from_db()
        self.assertEqual(foreign.balance, Decimal("0.00"))
        self.assertEqual(self._balances()[0], Decimal("100.00"))

    def test_failed_second_leg_rolls_back_everything(self):
        real_record = WalletService._record
        calls = []

        def record_then_fail(*args, **kwargs):
            calls.append(args[1])
            if len(calls) == 2:
                raise DatabaseError("lost connection")
            return real_record(*args, **kwargs)

        with patch(
            "ledger.services.wallet.WalletService._record", side_effect=record_then_fail
        ):
            with self.assertRaises(DatabaseError):
                WalletService.transfer(
                    self.profile, self.source.pk, self.destination.pk, "40.00"
                )

        self.assertEqual(self._balances(), (Decimal("100.00"), Decimal("0.00")))
        self.assertEqual(WalletActivity.objects.count(), 1)

    def test_transfer_idempotency(self):
        key = str(uuid.uuid4())
        WalletService.transfer(
            self.profile, self.source.pk, self.destination.pk, "10.00", idempotency_key=key
        )
        source, destination = WalletService.transfer(
            self.profile, self.source.pk, self.destination.pk, "10.00", idempotency_key=key
        )

        self.assertEqual(source.balance, Decimal("90.00"))
        self.assertEqual(destination.balance, Decimal("10.00"))
        self.assertEqual(WalletActivity.objects.count(), 3)

    def test_transfer_replay_after_destination_deleted(self):
        key = str(uuid.uuid4())
        WalletService.transfer(
            self.profile, self.source.pk, self.destination.pk, "10.00", idempotency_key=key
        )
        WalletService.delete_wallet(self.profile, self.destination.pk)

        with self.assertRaises(WalletNotFound) as ctx:
            WalletService.transfer(
                self.profile, self.source.pk, self.destination.pk, "10.00", idempotency_key=key
            )
        self.assertIn("Destination", str(ctx.exception))
        self.source.refresh_from_db()
        self.assertEqual(self.source.balance, Decimal("90.00"))

    def test_transfer_locks_wallets_in_ascending_id_order(self):
        locked = []
        select_for_update = Wallet.objects.select_for_update

        def recording_select_for_update(*args, **kwargs):
            queryset = select_for_update(*args, **kwargs)
            filter_rows = queryset.filter

            def filter(*f_args, **f_kwargs):
                locked.append(f_kwargs.get("pk"))
                return filter_rows(*f_args, **f_kwargs)

            queryset.filter = filter
            return queryset

        WalletService.transfer(self.profile, self.source.pk, self.destination.pk, "60.00")
        self.assertGreater(self.destination.pk, self.source.pk)

        with patch.object(
            Wallet.objects, "select_for_update", side_effect=recording_select_for_update
        ):
            WalletService.transfer(
                self.profile, self.destination.pk, self.source.pk, "20.00"
            )

        self.assertEqual(locked, [self.source.pk, self.destination.pk])
        self.assertEqual(self._balances(), (Decimal("60.00"), Decimal("40.00")))

    def test_transfer_beyond_destination_balance_limit_rejected(self):
        WalletService.deposit(self.profile, self.source.pk, "89999999999999900")
        WalletService.deposit(self.profile, self.destination.pk, "90000000000000000")

        with self.assertRaises(InvalidAmount):
            WalletService.transfer(
                self.profile, self.source.pk, self.destination.pk, "90000000000000000"
            )

        self.assertEqual(
            self._balances(),
            (Decimal("90000000000000000.00"), Decimal("90000000000000000.00")),
        )


class LedgerScenarioTest(TransactionTestCase):
    def test_withdraw_and_transfer_walkthrough(self):
        profile = make_profile()
        w = make_wallet(profile, "Cash", balance="100.00")
        x = make_wallet(profile, "Savings")
        self.assertEqual(w.currency, "PHP")
        rows = WalletActivity.objects.count()

        with self.assertRaises(InsufficientBalanceError):
            WalletService.withdraw(profile, w.pk, "150.00")
        w.refresh_from_db()
        self.assertEqual(w.balance, Decimal("100.00"))
        self.assertEqual(WalletActivity.objects.count(), rows)

        activity = WalletService.withdraw(profile, w.pk, "40.00")
        w.refresh_from_db()
        self.assertEqual(w.balance, Decimal("60.00"))
        self.assertEqual(activity.amount, Decimal("-40.00"))
        self.assertEqual(WalletActivity.objects.count(), rows + 1)

        WalletService.transfer(profile, w.pk, x.pk, "60.00")
        w.refresh_from_db()
        x.refresh_from_db()
        self.assertEqual(w.balance, Decimal("0.00"))
        self.assertEqual(x.balance, Decimal("60.00"))
        self.assertEqual(WalletActivity.objects.count(), rows + 3)

        self.assertEqual(LedgerAuditService.find_discrepancies(), [])

    def test_audit_detects_drift(self):
        profile = make_profile()
        wallet = make_wallet(profile, "Cash", balance="10.00")
        Wallet.objects.filter(pk=wallet.pk).update(balance=Decimal("11.00"))

        drift = LedgerAuditService.find_discrepancies()
        self.assertEqual(len(drift), 1)
        self.assertEqual(drift[0]["wallet_id"], wallet.pk)
        self.assertEqual(drift[0]["expected"], Decimal("10.00"))
