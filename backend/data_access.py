"""SQLAlchemy-backed stores injected into the donation and username logic.

Each store takes a session factory and opens one short-lived session per call,
so a store instance can be shared freely between requests.
"""
import logging
from decimal import Decimal, InvalidOperation

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from backend import models
from backend.database import SessionLocal

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def to_amount(value) -> Decimal:
    """Coerce a money value to a two-place Decimal."""
    try:
        amount = Decimal(str(value)).quantize(CENTS)
    except (InvalidOperation, ValueError, TypeError):
        raise ValueError(f"Invalid amount: {value!r}") from None
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    return amount


class DonationStore:
    def __init__(self, session_factory=SessionLocal):
        self._session_factory = session_factory

    def sum_donations_for_user(self, user_id: int) -> Decimal:
        db = self._session_factory()
        try:
            total = db.query(func.sum(models.Donation.amount)).filter(
                models.Donation.user_id == user_id
            ).scalar()
        finally:
            db.close()
        if total is None:
            return Decimal("0.00")
        return to_amount(total)

    def record_donation(self, user_id: int, amount, currency: str = "USD",
                        payment_reference: str | None = None) -> int:
        amount = to_amount(amount)
        if amount <= 0:
            raise ValueError(f"Donation amount must be positive, got {amount}")

        db = self._session_factory()
        try:
            donation = models.Donation(
                user_id=user_id,
                amount=amount,
                currency=currency,
                payment_reference=payment_reference,
            )
            db.add(donation)
            db.commit()
            logger.info(f"Recorded donation of {amount} {currency} for user {user_id}")
            return donation.id
        except SQLAlchemyError:
            db.rollback()
            raise
        finally:
            db.close()


class BannedWordStore:
    def __init__(self, session_factory=SessionLocal):
        self._session_factory = session_factory

    def list_banned_words(self) -> list[str]:
        db = self._session_factory()
        try:
            rows = db.query(models.BannedWord.word).order_by(models.BannedWord.word).all()
        finally:
            db.close()
        return [row.word for row in rows]

    def add_banned_word(self, word: str, created_by: int | None = None) -> bool:
        """Store ``word`` lowercased. Returns False for blanks and duplicates."""
        word = (word or "").strip().lower()
        if not word:
            return False

        db = self._session_factory()
        try:
            db.add(models.BannedWord(word=word, created_by=created_by))
            db.commit()
            return True
        except IntegrityError:
            db.rollback()
            return False
        finally:
            db.close()

    def remove_banned_word(self, word: str) -> bool:
        word = (word or "").strip().lower()
        db = self._session_factory()
        try:
            deleted = db.query(models.BannedWord).filter(
                models.BannedWord.word == word
            ).delete()
            db.commit()
            return deleted > 0
        finally:
            db.close()


class SettingsStore:
    def __init__(self, session_factory=SessionLocal):
        self._session_factory = session_factory

    def get_setting(self, name: str, default=None):
        db = self._session_factory()
        try:
            setting = db.query(models.Setting).filter(models.Setting.name == name).first()
            if setting:
                return setting.value
        except SQLAlchemyError as e:
            logger.error(f"Error getting setting {name}: {e}")
        finally:
            db.close()
        return default

    def update_setting(self, name: str, value) -> bool:
        if isinstance(value, bool):
            value = int(value)
        value = None if value is None else str(value)

        db = self._session_factory()
        try:
            setting = db.query(models.Setting).filter(models.Setting.name == name).first()
            if setting:
                setting.value = value
            else:
                db.add(models.Setting(name=name, value=value))
            db.commit()
            return True
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error updating setting {name}: {e}")
            return False
        finally:
            db.close()
