"""
Bootstrap helpers for quote sessions.

Wires config, logging, the state systems and the coordinators of one
quote session.
"""
from dataclasses import dataclass
from typing import Callable, List, Optional, Type

from loguru import logger

from blindquote.core.base_system import BaseSystem
from blindquote.core.config import ConfigManager
from blindquote.core.events import EventBus, Events
from blindquote.core.locator import ServiceLocator
from blindquote.quote.catalog import Catalog, load_catalog
from blindquote.quote.coordinator import AccessoryCoordinator
from blindquote.quote.pricing import PricingEngine
from blindquote.quote.right_panel import RightPanelCoordinator
from blindquote.quote.store import QuoteStore
from blindquote.quote.ui_state import UIState


@dataclass
class QuoteSession:
    """Everything one quote editor needs, already started."""
    locator: ServiceLocator
    event_bus: EventBus
    quote_store: QuoteStore
    ui_state: UIState
    pricing: PricingEngine
    accessories: AccessoryCoordinator
    right_panel: RightPanelCoordinator
    disconnect_config: Optional[Callable[[], None]] = None

    async def close(self) -> None:
        if self.disconnect_config is not None:
            self.disconnect_config()
        self.accessories.detach()
        self.right_panel.detach()
        await self.locator.stop_all()


class ApplicationBuilder:
    """
    Fluent builder for quote sessions.

    Example:
        session = await (ApplicationBuilder("Blind Quote", "config.json")
                         .with_logging()
                         .build())
        session.accessories.handle_mode_change("motor")
    """

    def __init__(self, name: str = "Blind Quote", config_path: str = "config.json"):
        self.name = name
        self.config_path = config_path
        self._extra_systems: List[Type[BaseSystem]] = []
        self._catalog: Optional[Catalog] = None
        self._setup_logging = False

    def add_system(self, system_cls: Type[BaseSystem]) -> "ApplicationBuilder":
        """Start `system_cls` alongside the built-in systems."""
        self._extra_systems.append(system_cls)
        return self

    def with_catalog(self, catalog: Catalog) -> "ApplicationBuilder":
        """Price against `catalog` instead of the configured rate table."""
        self._catalog = catalog
        return self

    def with_logging(self, enable: bool = True) -> "ApplicationBuilder":
        """Install the loguru sinks from the `general` settings on build."""
        self._setup_logging = enable
        return self

    async def build(self) -> QuoteSession:
        """Load config, start the systems, then wire pricing and the coordinators."""
        config = ConfigManager(self.config_path)

        if self._setup_logging:
            from blindquote.core.logging import setup_logging
            general = config.data.general
            setup_logging(general.debug_mode, general.log_dir, general.log_to_file)
        logger.info(f"Building {self.name} session from {self.config_path}")

        # Systems
        locator = ServiceLocator(config).init(self.config_path)
        for sys_cls in [EventBus, QuoteStore, UIState, *self._extra_systems]:
            locator.register_system(sys_cls)
        await locator.start_all()

        # Pricing
        catalog = self._catalog if self._catalog is not None else load_catalog(config.data.quote.catalog_path)
        pricing = PricingEngine(catalog)

        # Coordinators get their collaborators explicitly
        bus = locator.get_system(EventBus)
        store = locator.get_system(QuoteStore)
        ui_state = locator.get_system(UIState)
        accessories = AccessoryCoordinator(bus, store, ui_state, pricing)
        right_panel = RightPanelCoordinator(bus, store, ui_state, pricing)
        accessories.attach()
        right_panel.attach()

        # Settings changes reach the systems as bus events
        disconnect = config.on_changed.connect(
            lambda section, key, value: bus.publish(
                Events.CONFIG_CHANGED, {"section": section, "key": key, "value": value}))

        logger.info(f"{self.name} session ready (catalog {catalog.version})")
        return QuoteSession(locator, bus, store, ui_state, pricing, accessories, right_panel, disconnect)
