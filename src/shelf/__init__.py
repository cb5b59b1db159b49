# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""shelf: users owning books, behind token authentication."""

__version__ = "0.1.0"
