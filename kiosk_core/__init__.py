"""
Kiosk Core
==========

Ordering-kiosk engine: menu item customization, selection rules and cart
composition. The hosting views (welcome screen, menu grid, customization
dialog, cart) live outside this package and drive it through
`kiosk_core.customization.session`.
"""

__version__ = "0.1.0"
