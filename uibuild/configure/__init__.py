# SPDX-License-Identifier: MIT
"""Build configuration and platform detection."""
