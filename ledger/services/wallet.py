import logging
from decimal import Decimal, InvalidOperation

from django.db import IntegrityError, transaction
from django.db.models import F, Sum

from ledger.exceptions import (
    ConflictError,
    DuplicateWalletType,
    InsufficientBalanceError,
    InvalidAmount,
    ProfileNotFound,
    SameWallet,
    ValidationError,
    WalletInactive,
    WalletNotFound,
)
from ledger.models import Profile, Wallet, WalletActivity
from ledger.models.wallet import default_currency
from ledger.services.guard import AuthorizationGuard

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
MAX_AMOUNT = Decimal("10") ** 17


def parse_amount(value, label="Amount") -> Decimal:
    """
    Convert ``value`` into a positive two-place Decimal.

    Accepts Decimals, ints and numeric strings. Floats are read through
    their string form so 40.1 stays 40.10.

    Raises:
        InvalidAmount: For missing, non-numeric, non-positive, oversized
            or sub-cent values.
    """
    if value is None or isinstance(value, bool):
        raise InvalidAmount(f"{label} is required.")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation:
        raise InvalidAmount(f"{label} must be a number.")

    if not amount.is_finite():
        raise InvalidAmount(f"{label} must be a number.")
    if amount <= 0:
        raise InvalidAmount(f"{label} must be greater than zero.")
    if amount >= MAX_AMOUNT:
        raise InvalidAmount(f"{label} is too large.")
    if amount.as_tuple().exponent < -2 and amount != amount.quantize(CENT):
        raise InvalidAmount(f"{label} must have at most two decimal places.")
    return amount.quantize(CENT)


class WalletService:
    """
    The wallet ledger: balance mutations plus their activity records.

    Every method takes the calling profile explicitly and verifies that it
    owns the wallets it touches. Mutations run in one atomic block per call;
    wallet rows are locked with select_for_update() and changed through F()
    expressions so concurrent requests never lose an update. Transfers lock
    both rows in ascending id order to rule out deadlocks between opposite
    transfers on the same pair.
    """

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @staticmethod
    @transaction.atomic
    def create_wallet(profile: Profile, wallet_type: str, currency: str = None) -> Wallet:
        """
        Create an empty, active wallet for ``profile``.

        Raises:
            ProfileNotFound: If the profile is not stored.
            ValidationError: If the wallet type is blank.
            DuplicateWalletType: If the profile already has a wallet of this type.
        """
        if profile is None or not Profile.objects.filter(pk=profile.pk).exists():
            raise ProfileNotFound()

        wallet_type = (wallet_type or "").strip()
        if not wallet_type:
            raise ValidationError("Wallet type is required.")

        if Wallet.objects.filter(profile_id=profile.pk, wallet_type=wallet_type).exists():
            raise DuplicateWalletType(f"Wallet type '{wallet_type}' already exists.")

        try:
            wallet = Wallet.objects.create(
                profile_id=profile.pk,
                wallet_type=wallet_type,
                currency=(currency or "").strip() or default_currency(),
            )
        except IntegrityError:
            # Lost a race against a concurrent create of the same type.
            raise DuplicateWalletType(f"Wallet type '{wallet_type}' already exists.")

        logger.info(
            "Wallet created: wallet=%s profile=%s type=%s currency=%s",
            wallet.pk,
            profile.pk,
            wallet.wallet_type,
            wallet.currency,
        )
        return wallet

    @staticmethod
    def list_wallets(profile: Profile, active_only: bool = False):
        wallets = Wallet.objects.filter(profile_id=profile.pk)
        if active_only:
            wallets = wallets.filter(is_active=True)
        return wallets

    @staticmethod
    def get_wallet(profile: Profile, wallet_id: int) -> Wallet:
        wallet = Wallet.objects.filter(pk=wallet_id).first()
        if wallet is None:
            raise WalletNotFound()
        AuthorizationGuard.ensure_owner(profile, wallet)
        return wallet

    @staticmethod
    @transaction.atomic
    def update_wallet(
        profile: Profile, wallet_id: int, currency: str = None, wallet_type: str = None
    ) -> Wallet:
        """
        Partially update a wallet's currency and/or type.

        A new type is checked for uniqueness against the profile's other
        wallets.
        """
        wallet = WalletService._lock(profile, wallet_id)
        changed = []

        if wallet_type is not None:
            wallet_type = wallet_type.strip()
            if not wallet_type:
                raise ValidationError("Wallet type cannot be blank.")
            if wallet_type != wallet.wallet_type:
                taken = (
                    Wallet.objects.filter(profile_id=profile.pk, wallet_type=wallet_type)
                    .exclude(pk=wallet.pk)
                    .exists()
                )
                if taken:
                    raise DuplicateWalletType(
                        f"Wallet type '{wallet_type}' already exists."
                    )
                wallet.wallet_type = wallet_type
                changed.append("wallet_type")

        if currency is not None:
            currency = currency.strip()
            if not currency:
                raise ValidationError("Currency cannot be blank.")
            if currency != wallet.currency:
                wallet.currency = currency
                changed.append("currency")

        if changed:
            wallet.save(update_fields=changed + ["updated_at"])
            logger.info("Wallet updated: wallet=%s fields=%s", wallet.pk, changed)
        return wallet

    @staticmethod
    def activate_wallet(profile: Profile, wallet_id: int) -> Wallet:
        return WalletService._set_active(profile, wallet_id, True)

    @staticmethod
    def deactivate_wallet(profile: Profile, wallet_id: int) -> Wallet:
        return WalletService._set_active(profile, wallet_id, False)

    @staticmethod
    @transaction.atomic
    def _set_active(profile: Profile, wallet_id: int, active: bool) -> Wallet:
        wallet = WalletService._lock(profile, wallet_id)
        if wallet.is_active != active:
            wallet.is_active = active
            wallet.save(update_fields=["is_active", "updated_at"])
            logger.info(
                "Wallet %s: wallet=%s",
                "activated" if active else "deactivated",
                wallet.pk,
            )
        return wallet

    @staticmethod
    @transaction.atomic
    def delete_wallet(profile: Profile, wallet_id: int) -> None:
        """
        Permanently delete a wallet together with its activity log.

        Activities are removed first, then the wallet, inside one transaction.
        """
        wallet = WalletService._lock(profile, wallet_id)
        removed, _ = WalletActivity.objects.filter(wallet_id=wallet.pk).delete()
        wallet.delete()
        logger.info(
            "Wallet deleted: wallet=%s profile=%s activities_removed=%d",
            wallet_id,
            profile.pk,
            removed,
        )

    # ------------------------------------------------------------------
    # Balance mutations
    # ------------------------------------------------------------------

    @staticmethod
    @transaction.atomic
    def deposit(
        profile: Profile, wallet_id: int, amount, idempotency_key: str = None
    ) -> WalletActivity:
        """
        Deposit ``amount`` into the wallet.

        Returns:
            The DEPOSIT activity (or the stored one for a repeated key).

        Raises:
            InvalidAmount, WalletNotFound, UnauthorizedError, WalletInactive,
            ConflictError (key reused with different parameters).
        """
        amount = parse_amount(amount)

        if idempotency_key:
            existing = WalletService._replay(
                profile,
                idempotency_key,
                wallet_id,
                WalletActivity.ActivityType.DEPOSIT,
                amount,
            )
            if existing:
                return existing

        wallet = WalletService._lock(profile, wallet_id)
        WalletService._ensure_active(wallet)
        WalletService._ensure_capacity(wallet, amount)

        Wallet.objects.filter(pk=wallet.pk).update(balance=F("balance") + amount)
        wallet.refresh_from_db()

        activity = WalletService._record(
            wallet,
            WalletActivity.ActivityType.DEPOSIT,
            amount,
            idempotency_key=idempotency_key,
        )

        logger.info(
            "Deposit completed: wallet=%s amount=%s new_balance=%s activity=%s idempotency_key=%s",
            wallet.pk,
            amount,
            wallet.balance,
            activity.pk,
            idempotency_key,
        )
        return activity

    @staticmethod
    @transaction.atomic
    def withdraw(
        profile: Profile, wallet_id: int, amount, idempotency_key: str = None
    ) -> WalletActivity:
        """
        Withdraw ``amount`` from the wallet.

        The activity stores the amount negated.

        Raises:
            InvalidAmount, WalletNotFound, UnauthorizedError, WalletInactive,
            InsufficientBalanceError, ConflictError.
        """
        amount = parse_amount(amount)

        if idempotency_key:
            existing = WalletService._replay(
                profile,
                idempotency_key,
                wallet_id,
                WalletActivity.ActivityType.WITHDRAW,
                -amount,
            )
            if existing:
                return existing

        wallet = WalletService._lock(profile, wallet_id)
        WalletService._ensure_active(wallet)

        if wallet.balance < amount:
            logger.warning(
                "Withdrawal rejected (insufficient balance): wallet=%s balance=%s amount=%s",
                wallet.pk,
                wallet.balance,
                amount,
            )
            raise InsufficientBalanceError(available=wallet.balance, requested=amount)

        Wallet.objects.filter(pk=wallet.pk).update(balance=F("balance") - amount)
        wallet.refresh_from_db()

        activity = WalletService._record(
            wallet,
            WalletActivity.ActivityType.WITHDRAW,
            -amount,
            idempotency_key=idempotency_key,
        )

        logger.info(
            "Withdrawal completed: wallet=%s amount=%s new_balance=%s activity=%s",
            wallet.pk,
            amount,
            wallet.balance,
            activity.pk,
        )
        return activity

    @staticmethod
    @transaction.atomic
    def transfer(
        profile: Profile,
        from_wallet_id: int,
        to_wallet_id: int,
        amount,
        idempotency_key: str = None,
    ) -> tuple:
        """
        Move ``amount`` between two wallets owned by ``profile``.

        Both balance changes and both activity legs commit together or not
        at all.

        Returns:
            (source, destination) wallets after the transfer.

        Raises:
            InvalidAmount, SameWallet, WalletNotFound, UnauthorizedError,
            WalletInactive, InsufficientBalanceError, ConflictError.
        """
        amount = parse_amount(amount)
        if from_wallet_id == to_wallet_id:
            raise SameWallet()

        if idempotency_key:
            existing = WalletService._replay(
                profile,
                idempotency_key,
                from_wallet_id,
                WalletActivity.ActivityType.TRANSFER_OUT,
                -amount,
                related_wallet_id=to_wallet_id,
            )
            if existing:
                source = Wallet.objects.filter(pk=from_wallet_id).first()
                destination = Wallet.objects.filter(pk=to_wallet_id).first()
                if source is None:
                    raise WalletNotFound("Source wallet not found.")
                if destination is None:
                    raise WalletNotFound("Destination wallet not found.")
                return source, destination

        # Fixed lock order: ascending wallet id.
        locked = {}
        for wallet_id in sorted((from_wallet_id, to_wallet_id)):
            locked[wallet_id] = (
                Wallet.objects.select_for_update().filter(pk=wallet_id).first()
            )
        source, destination = locked[from_wallet_id], locked[to_wallet_id]

        if source is None:
            raise WalletNotFound("Source wallet not found.")
        if destination is None:
            raise WalletNotFound("Destination wallet not found.")
        AuthorizationGuard.ensure_owner(profile, source)
        AuthorizationGuard.ensure_owner(profile, destination)
        if not source.is_active:
            raise WalletInactive("Source wallet is inactive.")
        if not destination.is_active:
            raise WalletInactive("Destination wallet is inactive.")

        if source.balance < amount:
            logger.warning(
                "Transfer rejected (insufficient balance): from=%s to=%s balance=%s amount=%s",
                source.pk,
                destination.pk,
                source.balance,
                amount,
            )
            raise InsufficientBalanceError(available=source.balance, requested=amount)
        WalletService._ensure_capacity(destination, amount)

        Wallet.objects.filter(pk=source.pk).update(balance=F("balance") - amount)
        Wallet.objects.filter(pk=destination.pk).update(balance=F("balance") + amount)
        source.refresh_from_db()
        destination.refresh_from_db()

        WalletService._record(
            source,
            WalletActivity.ActivityType.TRANSFER_OUT,
            -amount,
            related_wallet_id=destination.pk,
            idempotency_key=idempotency_key,
        )
        WalletService._record(
            destination,
            WalletActivity.ActivityType.TRANSFER_IN,
            amount,
            related_wallet_id=source.pk,
        )

        logger.info(
            "Transfer completed: from=%s to=%s amount=%s from_balance=%s to_balance=%s",
            source.pk,
            destination.pk,
            amount,
            source.balance,
            destination.balance,
        )
        return source, destination

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @staticmethod
    def get_total_balance(profile: Profile) -> Decimal:
        """Sum of balances over the profile's active wallets; zero if none."""
        total = Wallet.objects.filter(profile_id=profile.pk, is_active=True).aggregate(
            total=Sum("balance")
        )["total"]
        return (total or Decimal("0")).quantize(CENT)

    @staticmethod
    def list_activities(profile: Profile, wallet_id: int = None):
        """Newest-first activity history, optionally narrowed to one wallet."""
        activities = WalletActivity.objects.filter(profile_id=profile.pk)
        if wallet_id is not None:
            wallet = WalletService.get_wallet(profile, wallet_id)
            activities = activities.filter(wallet_id=wallet.pk)
        return activities

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _lock(profile: Profile, wallet_id: int) -> Wallet:
        """Lock a wallet row for the current transaction and check ownership."""
        wallet = Wallet.objects.select_for_update().filter(pk=wallet_id).first()
        if wallet is None:
            raise WalletNotFound()
        AuthorizationGuard.ensure_owner(profile, wallet)
        return wallet

    @staticmethod
    def _ensure_active(wallet: Wallet) -> None:
        if not wallet.is_active:
            raise WalletInactive()

    @staticmethod
    def _ensure_capacity(wallet: Wallet, amount: Decimal) -> None:
        """Reject credits that would overflow the balance column."""
        if wallet.balance + amount >= MAX_AMOUNT:
            logger.warning(
                "Credit rejected (balance limit): wallet=%s balance=%s amount=%s",
                wallet.pk,
                wallet.balance,
                amount,
            )
            raise InvalidAmount("Resulting balance is too large.")

    @staticmethod
    def _record(
        wallet: Wallet,
        activity_type: str,
        amount: Decimal,
        related_wallet_id: int = None,
        idempotency_key: str = None,
    ) -> WalletActivity:
        return WalletActivity.objects.create(
            wallet=wallet,
            profile_id=wallet.profile_id,
            amount=amount,
            activity_type=activity_type,
            related_wallet_id=related_wallet_id,
            idempotency_key=idempotency_key or None,
        )

    @staticmethod
    def _replay(
        profile: Profile,
        idempotency_key: str,
        wallet_id: int,
        activity_type: str,
        amount: Decimal,
        related_wallet_id: int = None,
    ):
        """
        Return the activity the profile stored under ``idempotency_key`` when
        it matches the request, ``None`` when the profile never used the key.

        Raises:
            ConflictError: If the key was used for a different request.
        """
        existing = WalletActivity.objects.filter(
            profile_id=profile.pk, idempotency_key=idempotency_key
        ).first()
        if existing is None:
            return None

        matches = (
            existing.wallet_id == wallet_id
            and existing.activity_type == activity_type
            and existing.amount == amount
            and (related_wallet_id is None or existing.related_wallet_id == related_wallet_id)
        )
        if not matches:
            logger.warning(
                "Idempotency conflict: key=%s existing_activity=%s",
                idempotency_key,
                existing.pk,
            )
            raise ConflictError("Idempotency key was already used for a different request.")

        logger.info(
            "Idempotent %s request: key=%s activity=%s",
            activity_type.lower(),
            idempotency_key,
            existing.pk,
        )
        return existing
