"""
Core - Application Infrastructure.

Provides the systems every quote session is built on:
- ServiceLocator: Per-session system registry
- BaseSystem: Abstract base for all systems
- ConfigManager: Configuration with persistence
- EventBus: Synchronous pub/sub messaging

Usage:
    from blindquote.core import ServiceLocator, EventBus

    locator = ServiceLocator().init("config.json")
    locator.register_system(EventBus)
    await locator.start_all()
"""
from .base_system import BaseSystem
from .locator import ServiceLocator
from .config import (
    ConfigManager,
    AppConfig,
    GeneralSettings,
    QuoteSettings,
)
from .events import Signal, EventBus, Events, Subscription
from .decorators import system, subscribe_event, auto_subscribe

__all__ = [
    # Core infrastructure
    "BaseSystem",
    "ServiceLocator",

    # Configuration
    "ConfigManager",
    "AppConfig",
    "GeneralSettings",
    "QuoteSettings",

    # Events
    "Signal",
    "EventBus",
    "Events",
    "Subscription",

    # Decorators
    "system",
    "subscribe_event",
    "auto_subscribe",
]
