# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Chat service backend: accounts, chats, members and messages."""
