from decimal import Decimal

from django.db import IntegrityError, transaction
from django.db.models import RestrictedError
from django.test import TestCase

from ledger.models import Profile, Wallet, WalletActivity
from ledger.tests.helpers import PASSWORD, make_profile


class ProfileModelTest(TestCase):
    def test_create_user_hashes_password_and_starts_inactive(self):
        profile = Profile.objects.create_user(email="Bob@Example.com", password=PASSWORD)
        self.assertFalse(profile.is_active)
        self.assertTrue(profile.check_password(PASSWORD))
        self.assertNotEqual(profile.password, PASSWORD)
        self.assertEqual(profile.email, "Bob@example.com")

    def test_create_superuser_is_active_staff(self):
        admin = Profile.objects.create_superuser(email="root@example.com", password=PASSWORD)
        self.assertTrue(admin.is_active)
        self.assertTrue(admin.is_staff)
        self.assertTrue(admin.has_perm("ledger.view_wallet"))

    def test_email_is_unique(self):
        make_profile("dup@example.com")
        with self.assertRaises(IntegrityError):
            make_profile("dup@example.com")

    def test_profile_str(self):
        self.assertEqual(str(make_profile("str@example.com")), "str@example.com")


class WalletModelTest(TestCase):
    def setUp(self):
        self.profile = make_profile()

    def test_defaults(self):
        wallet = Wallet.objects.create(profile=self.profile, wallet_type="Cash")
        self.assertEqual(wallet.balance, Decimal("0.00"))
        self.assertEqual(wallet.currency, "PHP")
        self.assertTrue(wallet.is_active)
        self.assertEqual(wallet.state, Wallet.State.ACTIVE)

    def test_state_follows_active_flag(self):
        wallet = Wallet.objects.create(
            profile=self.profile, wallet_type="Cash", is_active=False
        )
        self.assertEqual(wallet.state, Wallet.State.INACTIVE)

    def test_negative_balance_rejected_by_database(self):
        wallet = Wallet.objects.create(profile=self.profile, wallet_type="Cash")
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Wallet.objects.filter(pk=wallet.pk).update(balance=Decimal("-0.01"))

    def test_wallet_type_unique_per_profile(self):
        Wallet.objects.create(profile=self.profile, wallet_type="Cash")
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Wallet.objects.create(profile=self.profile, wallet_type="Cash")

        other = make_profile("other@example.com")
        Wallet.objects.create(profile=other, wallet_type="Cash")
        self.assertEqual(Wallet.objects.filter(wallet_type="Cash").count(), 2)

    def test_wallet_str(self):
        wallet = Wallet.objects.create(profile=self.profile, wallet_type="Savings")
        self.assertIn("Savings", str(wallet))
        self.assertIn("PHP", str(wallet))

    def test_is_owned_by(self):
        wallet = Wallet.objects.create(profile=self.profile, wallet_type="Cash")
        self.assertTrue(wallet.is_owned_by(self.profile))
        self.assertFalse(wallet.is_owned_by(make_profile("mallory@example.com")))
        self.assertFalse(wallet.is_owned_by(None))


class WalletActivityModelTest(TestCase):
    def setUp(self):
        self.profile = make_profile()
        self.wallet = Wallet.objects.create(profile=self.profile, wallet_type="Cash")

    def _activity(self, **extra):
        return WalletActivity.objects.create(
            wallet=self.wallet,
            profile=self.profile,
            amount=Decimal("10.00"),
            activity_type=WalletActivity.ActivityType.DEPOSIT,
            **extra,
        )

    def test_activity_is_append_only(self):
        activity = self._activity()
        activity.amount = Decimal("99.00")
        with self.assertRaises(ValueError):
            activity.save()
        activity.refresh_from_db()
        self.assertEqual(activity.amount, Decimal("10.00"))

    def test_wallet_with_activity_cannot_be_deleted_directly(self):
        self._activity()
        with self.assertRaises(RestrictedError):
            self.wallet.delete()

    def test_profile_delete_removes_wallets_and_activity(self):
        self._activity()
        self.profile.delete()
        self.assertFalse(Wallet.objects.exists())
        self.assertFalse(WalletActivity.objects.exists())

    def test_activity_str(self):
        self.assertIn("DEPOSIT", str(self._activity()))
