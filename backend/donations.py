"""
Donation tiers and avatar unlocks.

Any donation grants VIP avatars; larger lifetime totals unlock further tiers.
Tiers are additive: reaching a tier never removes the ones below it.
"""
import logging
from collections import namedtuple
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend import models

logger = logging.getLogger(__name__)

DonationTier = namedtuple("DonationTier", ["threshold", "name", "label", "avatars"])

DONATION_TIERS = [
    DonationTier(0, "vip", "VIP", (
        "🧛", "🧙‍♂️", "🧙‍♀️", "🍑", "🍕", "🦉", "🍄", "🐤", "🐣", "🏰", "🍤",
        "💃🏻", "🕺", "💃🏼", "🐞", "🐶", "🐩", "🐕",
    )),
    DonationTier(2, "tier1", "Bronze", (
        "🧒", "👦", "👧", "🧑", "👱", "👨", "🧔", "🧒🏻", "🧒🏼", "🧒🏽", "🧒🏾",
        "👩🏻", "👩🏼", "👨🏿", "🧒🏿", "👩🏿", "🙎🏿", "🧑🏿", "👧🏿", "🤴🏿", "👸🏿",
        "🧑🏻", "🧑🏾", "🧑🏽", "👩‍🦱", "👩🏻‍🦱", "👩🏾‍🦱", "👩🏿‍🦱", "👳", "👳🏻",
        "👳🏽", "👳🏾", "👳🏿", "💃🏽", "💃🏿", "⛷️",
    )),
    DonationTier(5, "tier2", "Silver", (
        "👄", "💋", "🕵️‍♀️", "✿", "👨🏿‍💻", "👩🏿‍💻", "👨🏿‍🚀", "👩🏿‍🚀", "💏🏿", "🕵🏿",
        "🤵🏿", "🕵🏿‍♀️", "👨🏿‍⚖️", "👩🏿‍⚖️", "🤴🏿", "👸🏿", "👍", "👍🏻", "👍🏼",
        "👍🏽", "👍🏾", "👍🏿", "👶", "🧕", "🧕🏻", "🧕🏽", "🧕🏾", "👩‍🦼", "👩🏻‍🦼",
        "👩🏾‍🦼", "👩🏿‍🦼", "👨‍🦼", "👨🏻‍🦼", "👨🏾‍🦼",
    )),
    DonationTier(25, "tier3", "Gold", (
        "🧢", "💀", "🖱️", "👩‍⚖️", "🦹", "🎱",
    )),
    DonationTier(50, "tier4", "Platinum", (
        "🍆", "👨‍🎨", "🎠", "🎪", "🧖", "🛀", "🛀🏻", "🛀🏾", "🛀🏿", "🌻",
    )),
]

ALL_DONATION_AVATARS = frozenset(a for tier in DONATION_TIERS for a in tier.avatars)


def get_donation_tier_avatars(total_donated) -> dict:
    """Return ``{tier_name: [avatars]}`` for every tier reached by ``total_donated``.

    ``vip`` is always present. The remaining tiers are included in threshold
    order when ``total_donated >= threshold``.
    """
    avatars = {}
    for tier in DONATION_TIERS:
        if tier.threshold == 0 or total_donated >= tier.threshold:
            avatars[tier.name] = list(tier.avatars)
    return avatars


def is_avatar_unlocked(avatar: str, total_donated) -> bool:
    tier_avatars = get_donation_tier_avatars(total_donated)
    unlocked = set()
    for avatars in tier_avatars.values():
        unlocked.update(avatars)
    return avatar in unlocked


def get_donation_tier_label(total_donated) -> str | None:
    """Badge name of the highest paid tier reached, or None below the first."""
    label = None
    for tier in DONATION_TIERS:
        if tier.threshold > 0 and total_donated >= tier.threshold:
            label = tier.label
    return label


def is_donation_avatar(avatar: str) -> bool:
    return avatar in ALL_DONATION_AVATARS


def can_use_avatar(avatar: str, total_donated) -> bool:
    # Only donation avatars are gated.
    if not is_donation_avatar(avatar):
        return True
    return is_avatar_unlocked(avatar, total_donated)


class DonationTierResolver:
    """Resolves a user's donation total and the avatars it unlocks.

    ``store`` must provide ``sum_donations_for_user(user_id)``.
    """

    def __init__(self, store):
        self.store = store

    def get_user_total_donations(self, user_id: int) -> Decimal:
        total = Decimal("0.00")
        try:
            result = self.store.sum_donations_for_user(user_id)
            if result is not None:
                total = Decimal(str(result))
        except Exception as e:
            logger.error(f"Error getting total donations for user {user_id}: {e}")
        return total

    def get_user_tier_avatars(self, user_id: int) -> dict:
        return get_donation_tier_avatars(self.get_user_total_donations(user_id))

    def is_avatar_unlocked_for_user(self, avatar: str, user_id: int) -> bool:
        return is_avatar_unlocked(avatar, self.get_user_total_donations(user_id))


def update_user_avatar(db: Session, user_id: int, avatar: str, resolver: DonationTierResolver) -> bool:
    if not avatar:
        logger.info(f"User {user_id} submitted no avatar")
        return False

    user = db.query(models.User).filter(models.User.id == user_id).first()
    if not user:
        return False

    if not can_use_avatar(avatar, resolver.get_user_total_donations(user_id)):
        logger.info(f"User {user_id} tried to use locked avatar {avatar!r}")
        return False

    try:
        user.avatar = avatar
        db.commit()
        return True
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating avatar for user {user_id}: {e}")
        return False
