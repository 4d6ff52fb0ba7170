"""Tests for username validation (profanity_filter.py).

Stores are replaced by small fakes so the rules can be checked without a database.
"""
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from backend.profanity_filter import UsernameValidator, ANONYMOUS_PATTERN


class FakeBannedWords:
    def __init__(self, words=None, error=None):
        self.words = list(words or [])
        self.error = error
        self.calls = 0

    def list_banned_words(self):
        self.calls += 1
        if self.error:
            raise self.error
        return self.words


class FakeSettings:
    def __init__(self, values=None):
        self.values = values or {}

    def get_setting(self, name, default=None):
        return self.values.get(name, default)


def make_validator(words=("ass", "badword"), settings=None, error=None):
    return UsernameValidator(FakeBannedWords(words, error), FakeSettings(settings))


class TestAnonymousVariants:
    @pytest.mark.parametrize("name", [
        "Anonymous", "anonymous", "ANONYMOUS", "annonymous", "Annonymous",
        "anonimous", "annoonymous", "annnonnymmous",
    ])
    def test_rejected(self, name):
        assert make_validator(words=[]).is_offensive_username(name)

    @pytest.mark.parametrize("name", [
        "anonymously_yours", "xanonymous", "anonymous1", "anon", "nonymous",
    ])
    def test_pattern_is_anchored(self, name):
        assert not make_validator(words=[]).is_offensive_username(name)

    def test_pattern_is_case_insensitive(self):
        assert ANONYMOUS_PATTERN.fullmatch("AnOnYmOuS")

    def test_rejected_before_loading_banned_words(self):
        validator = make_validator()
        assert validator.is_offensive_username("Anonymous")
        assert validator.banned_words.calls == 0


class TestBannedWords:
    def test_substring_is_not_a_match(self):
        assert not make_validator().is_offensive_username("classic")

    @pytest.mark.parametrize("name", ["ass", "big ass", "ASS", "my-ass-name", "Ass.hat"])
    def test_standalone_token_matches(self, name):
        assert make_validator().is_offensive_username(name)

    def test_underscore_joins_words(self):
        # \b treats "_" as a word character
        assert not make_validator().is_offensive_username("my_ass_name")

    def test_stored_case_is_ignored(self):
        validator = make_validator(words=["BadWord"])
        assert validator.is_offensive_username("the badword guy")

    def test_regex_characters_are_escaped(self):
        validator = make_validator(words=["a.b"])
        assert not validator.is_offensive_username("axb")
        assert validator.is_offensive_username("a.b")

    def test_clean_name_accepted(self):
        assert not make_validator().is_offensive_username("PixelHunter")

    def test_empty_name_accepted(self):
        assert not make_validator().is_offensive_username("")

    def test_unicode_name(self):
        assert not make_validator().is_offensive_username("Zoë_日本")

    def test_empty_banned_list(self):
        assert not make_validator(words=[]).is_offensive_username("ass")

    def test_store_failure_accepts_and_logs(self, caplog):
        validator = make_validator(error=RuntimeError("no such table"))
        assert not validator.is_offensive_username("ass")
        assert "no such table" in caplog.text

    def test_store_failure_still_blocks_anonymous(self):
        validator = make_validator(error=RuntimeError("no such table"))
        assert validator.is_offensive_username("Anonymous")


class TestValidationFlag:
    @pytest.mark.parametrize("value", [1, "1", True, "1.0", " 1 ", 1.0])
    def test_disabled_accepts_everything(self, value):
        validator = make_validator(settings={"disable_username_validation": value})
        assert not validator.is_offensive_username("Anonymous")
        assert not validator.is_offensive_username("ass")
        assert validator.banned_words.calls == 0

    @pytest.mark.parametrize("value", [0, "0", None, "", False, "true", "yes", "on", "2"])
    def test_enabled_values(self, value):
        validator = make_validator(settings={"disable_username_validation": value})
        assert validator.is_offensive_username("Anonymous")


class TestCheckUsername:
    @pytest.mark.parametrize("name,reason", [
        ("", "Username is required"),
        (None, "Username is required"),
        ("ab", "Username must be at least 3 characters"),
        ("  ab  ", "Username must be at least 3 characters"),
        ("   ", "Username is required"),
        ("a" * 65, "Username must be 64 characters or less"),
        ("bad name", "Username can only contain letters, numbers, and underscores"),
        ("Annonymous", 'The username "Anonymous" is reserved. Please choose another username.'),
        ("ass", "Invalid username. Please choose another."),
    ])
    def test_rejections(self, name, reason):
        assert make_validator().check_username(name) == (False, reason)

    def test_valid(self):
        assert make_validator().check_username("classic_gamer") == (True, None)
        assert make_validator().check_username("a" * 64) == (True, None)

    def test_surrounding_whitespace_is_trimmed(self):
        assert make_validator().check_username("name\n") == (True, None)
        assert make_validator().check_username("  classic_gamer ") == (True, None)
        assert make_validator().check_username(" ass ") == (False, "Invalid username. Please choose another.")

    def test_reserved_name_blocked_even_when_validation_disabled(self):
        validator = make_validator(settings={"disable_username_validation": 1})
        is_valid, reason = validator.check_username("Anonymous")
        assert not is_valid
        assert "reserved" in reason


class TestScanUsernames:
    def test_flags_bad_names_only(self):
        flagged = make_validator().scan_usernames(["good_one", "", "Anonymous", "ass", "classic"])
        assert [f["username"] for f in flagged] == ["Anonymous", "ass"]
        assert all(f["reason"] for f in flagged)
