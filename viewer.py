# viewer.py

"""
================================================================================
EARTHQUAKE SYMBOL MAP VIEWER
================================================================================
A runnable window that loads a landmass topology, a region-name table and an
earthquake feed, and shows them with the SymbolMap chart.

Usage:
    python viewer.py --config config.json

Controls:
- Rotate: drag horizontally with the left mouse button
- Details: hover over a circle
- Dismiss an error message: click it or press ESC
- Quit: ESC (with no error shown) or close window
================================================================================
"""
import argparse
import json
import logging
import logging.config
import os
import sys

import pygame
import pygame_gui

from symbol_map import Scene, SymbolMap, ChartSurface
from symbol_map import io as loaders
from symbol_map.errors import ErrorBanner, process_error

# --- Application Constants (Rule 1) ---
DEFAULT_CONFIG_PATH = "config.json"
LOGGING_CONFIG_PATH = "logging_config.json"
LOG_DIR = "logs"
STATUS_BAR_HEIGHT = 30
SURFACE_ID = "map"


class ViewerApp:
    """The main application class for the symbol map viewer."""

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH):
        self._setup_logging()
        self.logger.info("Viewer starting.")

        self.config = self._load_config(config_path)
        self._setup_pygame()
        self._setup_ui()

        # --- Chart Setup ---
        display_config = self.config['display']
        self.scene = Scene()
        self.surface = self.scene.add(ChartSurface(
            SURFACE_ID,
            (0, 0, self.screen_width, self.screen_height - STATUS_BAR_HEIGHT),
        ))
        self.chart = SymbolMap(
            self.scene,
            config=self.config.get('chart', {}),
            logger=logging.getLogger("symbol_map.chart"),
        )
        self.chart.status.subscribe(self.status_label.set_text)

        self._load_data()
        try:
            self.chart.draw(SURFACE_ID)
        except (KeyError, ValueError) as e:
            # A topology without the configured land object, or unsupported geometry.
            process_error(e, self.error_banner)

        self.tick_rate = display_config.get('clock_tick_rate', 60)
        self.is_running = True

    def _setup_logging(self):
        """Initializes the logging system from a config file."""
        if not os.path.exists(LOG_DIR):
            os.makedirs(LOG_DIR)

        try:
            with open(LOGGING_CONFIG_PATH, 'rt') as f:
                log_config = json.load(f)
            log_config['handlers']['file']['filename'] = os.path.join(LOG_DIR, 'viewer.log')
            logging.config.dictConfig(log_config)
        except (FileNotFoundError, json.JSONDecodeError, KeyError):
            logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
            logging.getLogger(__name__).warning(
                f"Could not load logging configuration from '{LOGGING_CONFIG_PATH}'; using defaults."
            )
        self.logger = logging.getLogger(__name__)

    def _load_config(self, config_path: str) -> dict:
        """Loads viewer settings from the config file."""
        self.logger.info(f"Loading configuration from {config_path}")
        try:
            with open(config_path, 'r') as f:
                return json.load(f)
        except FileNotFoundError:
            self.logger.critical(f"Configuration file not found at {config_path}. Exiting.")
            sys.exit(1)
        except json.JSONDecodeError:
            self.logger.critical(f"Error decoding JSON from {config_path}. Exiting.")
            sys.exit(1)

    def _setup_pygame(self):
        """Initializes Pygame and the display window."""
        pygame.init()
        display_config = self.config['display']
        self.screen_width = display_config['screen_width']
        self.screen_height = display_config['screen_height']

        self.logger.info(f"Initializing display ({self.screen_width}x{self.screen_height}).")
        self.screen = pygame.display.set_mode((self.screen_width, self.screen_height))
        pygame.display.set_caption(display_config.get('caption', "Earthquake Symbol Map"))
        self.clock = pygame.time.Clock()

        try:
            self.ui_font = pygame.font.SysFont("monospace", 16)
        except pygame.error:
            self.ui_font = pygame.font.Font(None, 22)
        self.error_banner = ErrorBanner(self.ui_font)
        self.logger.info("Pygame initialized successfully.")

    def _setup_ui(self):
        """Initializes the pygame_gui manager and the status line label."""
        self.ui_manager = pygame_gui.UIManager((self.screen_width, self.screen_height))
        self.status_label = pygame_gui.elements.UILabel(
            relative_rect=pygame.Rect(
                0, self.screen_height - STATUS_BAR_HEIGHT,
                self.screen_width, STATUS_BAR_HEIGHT
            ),
            text="",
            manager=self.ui_manager
        )

    def _load_data(self):
        """
        Loads each input file. A failing file is reported in the error banner
        and skipped; the chart then refuses to draw until it has what it needs.
        """
        data_config = self.config.get('data', {})

        try:
            self.chart.set_lookup(loaders.read_region_names(data_config['region_names']))
        except (OSError, KeyError, ValueError) as e:
            process_error(e, self.error_banner)

        try:
            self.chart.set_map(loaders.read_topology(data_config['land']))
        except (OSError, KeyError, ValueError) as e:
            process_error(e, self.error_banner)

        try:
            records = loaders.read_quakes(data_config['quakes'])
            value_field = self.config.get('chart', {}).get('value_field', 'mag')
            # The feed has no 'value' column; size the symbols by magnitude.
            self.chart.set_value(lambda d: d[value_field]).set_values(records)
        except (OSError, KeyError, ValueError) as e:
            process_error(e, self.error_banner)

    def run(self):
        """The main application loop."""
        self.logger.info("Entering main loop.")
        try:
            while self.is_running:
                time_delta = self.clock.tick(self.tick_rate) / 1000.0
                self._handle_events()
                self._draw(time_delta)
        except Exception:
            self.logger.critical("An unhandled exception occurred!", exc_info=True)
        finally:
            self.logger.info("Exiting viewer.")
            pygame.quit()

    def _handle_events(self):
        """Processes user input and other events."""
        for event in pygame.event.get():
            self.ui_manager.process_events(event)

            if event.type == pygame.QUIT:
                self.is_running = False
                continue
            if self.error_banner.handle_event(event):
                continue
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.logger.info("Event: ESC key pressed. Exiting.")
                self.is_running = False
                continue

            # Mouse events go to the chart surface (drag rotation and hover).
            self.surface.dispatch(event)

    def _draw(self, time_delta: float):
        """Renders the chart surface, the status line and any error banner."""
        self.screen.fill((255, 255, 255))
        self.surface.blit_to(self.screen)

        self.ui_manager.update(time_delta)
        self.ui_manager.draw_ui(self.screen)
        self.error_banner.draw(self.screen)

        pygame.display.flip()


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description="Earthquake symbol map viewer.")
    parser.add_argument(
        "--config",
        type=str,
        default=DEFAULT_CONFIG_PATH,
        help="Path to the JSON configuration file for the viewer."
    )
    args = parser.parse_args()

    app = ViewerApp(config_path=args.config)
    app.run()
