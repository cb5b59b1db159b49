# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Authentication core.

- passwords: argon2id hashing; verification never raises on a bad hash
- users: the ``UserDirectory`` protocol and the username/password check
  behind sign-in
- tokens: bearer tokens carrying ``{id, username, role, iat, exp}``, checked
  again against the directory on every request
"""
