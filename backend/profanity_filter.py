import re
import logging

from backend.config import DISABLE_USERNAME_VALIDATION

logger = logging.getLogger(__name__)

# Blocks "Anonymous" look-alikes such as "Annonymous", "anonimous" and
# "annoonymous". The exact-match check in is_offensive_username stays as a
# fallback in case this pattern is ever loosened.
ANONYMOUS_PATTERN = re.compile(r"an+o+n+[yi]+m+o+u*s", re.IGNORECASE)

USERNAME_CHARS_PATTERN = re.compile(r"[a-zA-Z0-9_]+")

MIN_USERNAME_LENGTH = 3
MAX_USERNAME_LENGTH = 64

# Seeded into the banned_words table by seed_data.py; admins manage the rest.
DEFAULT_BANNED_WORDS = [
    "fuck", "shit", "bitch", "cunt", "cock", "dick", "pussy", "ass",
    "whore", "slut", "bastard", "nazi", "hitler", "kkk", "rape", "rapist",
    "pedo", "pedophile", "retard", "faggot", "nigger", "nigga",
]


def _flag_enabled(value):
    # Compared numerically against 1, so "1.0" counts and "true" does not.
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    try:
        return float(str(value).strip()) == 1
    except ValueError:
        return False


def _banned_word_pattern(word):
    return re.compile(r"\b" + re.escape(word.lower()) + r"\b")


class UsernameValidator:
    """Decides whether a display name is disallowed.

    ``banned_words`` must provide ``list_banned_words()`` and ``settings``
    must provide ``get_setting(name, default)``.
    """

    def __init__(self, banned_words, settings):
        self.banned_words = banned_words
        self.settings = settings

    def is_offensive_username(self, username):
        if _flag_enabled(self.settings.get_setting(DISABLE_USERNAME_VALIDATION, 0)):
            return False

        username_lower = username.lower()

        if ANONYMOUS_PATTERN.fullmatch(username):
            return True

        if username_lower == "anonymous":
            return True

        try:
            words = self.banned_words.list_banned_words()
        except Exception as e:
            logger.error(f"Error loading banned words, skipping banned word check: {e}")
            words = []

        for word in words:
            if word and _banned_word_pattern(word).search(username_lower):
                return True

        return False

    def check_username(self, username):
        if isinstance(username, str):
            username = username.strip()
        if not username or not isinstance(username, str):
            return False, "Username is required"

        if len(username) < MIN_USERNAME_LENGTH:
            return False, f"Username must be at least {MIN_USERNAME_LENGTH} characters"

        if len(username) > MAX_USERNAME_LENGTH:
            return False, f"Username must be {MAX_USERNAME_LENGTH} characters or less"

        if not USERNAME_CHARS_PATTERN.fullmatch(username):
            return False, "Username can only contain letters, numbers, and underscores"

        if username.lower() == "anonymous" or ANONYMOUS_PATTERN.fullmatch(username):
            return False, 'The username "Anonymous" is reserved. Please choose another username.'

        if self.is_offensive_username(username):
            return False, "Invalid username. Please choose another."

        return True, None

    def scan_usernames(self, usernames):
        flagged = []
        for username in usernames:
            is_valid, reason = self.check_username(username)
            if not is_valid and reason != "Username is required":
                flagged.append({"username": username, "reason": reason})
        return flagged
