import logging
import os
from datetime import datetime

from city_builder.config import LOG_DIR, LOG_TO_FILE


class CityLogger:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(CityLogger, cls).__new__(cls)
            cls._instance._setup()
        return cls._instance

    def _setup(self):
        # Simulation Log
        self.sim_logger = logging.getLogger('city_sim')
        self.sim_logger.setLevel(logging.DEBUG)
        self.sim_logger.propagate = False

        if LOG_TO_FILE:
            if not os.path.exists(LOG_DIR):
                os.makedirs(LOG_DIR)
            fh = logging.FileHandler(
                os.path.join(LOG_DIR, f'sim_{datetime.now().strftime("%Y%m%d")}.log'))
            fh.setFormatter(logging.Formatter('%(asctime)s [%(levelname)s] %(message)s'))
            self.sim_logger.addHandler(fh)
        else:
            self.sim_logger.addHandler(logging.NullHandler())

    def log_event(self, category: str, message: str):
        print(f"[{category}] {message}")
        self.sim_logger.info(f"[{category}] {message}")

    def debug(self, category: str, message: str):
        self.sim_logger.debug(f"[{category}] {message}")

    def error(self, category: str, message: str):
        print(f"[{category}] {message}")
        self.sim_logger.error(f"[{category}] {message}")
