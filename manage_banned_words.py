"""
Manage the banned word list and check usernames against it.

Usage:
    python manage_banned_words.py add "badword"
    python manage_banned_words.py remove "badword"
    python manage_banned_words.py list
    python manage_banned_words.py check "SomeName"
    python manage_banned_words.py scan
"""
import os
import sys
import argparse

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from backend.config import configure_logging
from backend.database import SessionLocal, ensure_database_dir
from backend.data_access import BannedWordStore, SettingsStore
from backend.profanity_filter import UsernameValidator
from backend import models


def add_word(store, word):
    if store.add_banned_word(word):
        print(f"Added banned word '{word.strip().lower()}'")
    else:
        print(f"'{word.strip().lower()}' is already banned or empty")


def remove_word(store, word):
    if store.remove_banned_word(word):
        print(f"Removed banned word '{word.strip().lower()}'")
    else:
        print(f"'{word.strip().lower()}' not found in banned words")


def list_words(store):
    words = store.list_banned_words()
    if words:
        print(f"\n{len(words)} banned words:")
        for word in words:
            print(f"  {word}")
    else:
        print("No banned words")


def check_name(validator, username):
    is_valid, reason = validator.check_username(username)
    if is_valid:
        print(f"'{username}' is allowed")
    else:
        print(f"'{username}' rejected: {reason}")
    return is_valid


def scan_users(validator, session_factory):
    db = session_factory()
    try:
        usernames = [row.username for row in db.query(models.User.username).all()]
    finally:
        db.close()

    flagged = validator.scan_usernames(usernames)
    for f in flagged:
        print(f"  {f['username']}: {f['reason']}")
    print(f"Scanned {len(usernames)} usernames, flagged {len(flagged)}")
    return flagged


def main(argv=None, session_factory=SessionLocal):
    parser = argparse.ArgumentParser(description="Manage banned words")
    sub = parser.add_subparsers(dest="command", required=True)

    add_p = sub.add_parser("add", help="Ban a word")
    add_p.add_argument("word")
    remove_p = sub.add_parser("remove", help="Unban a word")
    remove_p.add_argument("word")
    sub.add_parser("list", help="List banned words")
    check_p = sub.add_parser("check", help="Check a username")
    check_p.add_argument("username")
    sub.add_parser("scan", help="Scan existing usernames")

    args = parser.parse_args(argv)

    store = BannedWordStore(session_factory)
    validator = UsernameValidator(store, SettingsStore(session_factory))

    if args.command == "add":
        add_word(store, args.word)
    elif args.command == "remove":
        remove_word(store, args.word)
    elif args.command == "list":
        list_words(store)
    elif args.command == "check":
        return 0 if check_name(validator, args.username) else 1
    elif args.command == "scan":
        scan_users(validator, session_factory)
    return 0


if __name__ == "__main__":
    configure_logging()
    ensure_database_dir()
    sys.exit(main())
