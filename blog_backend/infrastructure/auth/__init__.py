# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .guard import AuthGuard, current_identity

__all__ = ["AuthGuard", "current_identity"]
