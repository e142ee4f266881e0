"""Browser driver capability interface."""

from murwren_e2e.driver.base import (
    DESKTOP,
    MOBILE,
    BrowserDriver,
    Observer,
    PageSession,
    Viewport,
)

__all__ = ["DESKTOP", "MOBILE", "BrowserDriver", "Observer", "PageSession", "Viewport"]
