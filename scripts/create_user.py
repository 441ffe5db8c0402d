#!/usr/bin/env python3
from __future__ import annotations

from getpass import getpass

import yaml

from cboard.auth.passwords import hash_password
from cboard.settings import Settings

SEED_PATH = Settings.from_env().seed_path


def main() -> None:
    SEED_PATH.parent.mkdir(parents=True, exist_ok=True)
    if SEED_PATH.exists():
        raw = yaml.safe_load(SEED_PATH.read_text(encoding="utf-8")) or {}
    else:
        raw = {"version": 1, "users": {}, "comments": []}

    if "users" not in raw or not isinstance(raw["users"], dict):
        raw["users"] = {}

    username = input("Username: ").strip()
    if not username:
        raise SystemExit("Username vacío")
    if username in raw["users"]:
        raise SystemExit(f"El usuario '{username}' ya existe")

    pw1 = getpass("Password: ")
    pw2 = getpass("Repeat password: ")
    if pw1 != pw2:
        raise SystemExit("Passwords no coinciden")

    raw["users"][username] = {"password_hash": hash_password(pw1)}

    SEED_PATH.write_text(yaml.safe_dump(raw, sort_keys=False, allow_unicode=True), encoding="utf-8")
    print(f"OK -> {SEED_PATH}")


if __name__ == "__main__":
    main()
