# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Authentication helpers.

This package provides:
- Password hashing/verification (argon2)
- An in-memory credential store, optionally seeded from data/board.yml
- An in-memory session registry with opaque random tokens
"""
